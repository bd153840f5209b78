# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for hash record formatting."""

from __future__ import annotations

import io
import os

from recursum.models import FileError, ResultItem
from recursum.reporting import OutputSink, format_outcome, format_record


def test_default_record_is_path_tab_digest() -> None:
    result = ResultItem(0, "dir/a.txt", "abc123", 3)

    assert format_record(result) == b"dir/a.txt\tabc123\n"


def test_compatible_record_puts_digest_first() -> None:
    result = ResultItem(0, "a.txt", "abc123", 3)

    assert format_record(result, separator="  ", hash_first=True) == b"abc123  a.txt\n"


def test_error_record_keeps_its_position_and_reason() -> None:
    result = ResultItem(1, "locked", FileError("Permission denied"))

    assert format_outcome(result.outcome) == "<ERROR: Permission denied>"
    assert format_record(result, separator="\0") == b"locked\0<ERROR: Permission denied>\n"


def test_undecodable_path_bytes_are_written_back_unchanged() -> None:
    raw = b"caf\xe9.txt"
    result = ResultItem(0, os.fsdecode(raw), "ff", 1)

    assert format_record(result).startswith(raw + b"\t")


def test_output_sink_writes_records_in_call_order() -> None:
    stream = io.BytesIO()
    sink = OutputSink(stream, separator=" ")

    sink(ResultItem(0, "a", "1"))
    sink(ResultItem(1, "b", "2"))
    sink.flush()

    assert stream.getvalue() == b"a 1\nb 2\n"
