# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Serialise ordered hash results as one line per file."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import BinaryIO

from ..config import DEFAULT_SEPARATOR
from ..models import FileError, ResultItem


def format_outcome(outcome: str | FileError) -> str:
    """Return the text printed in the digest column for ``outcome``."""

    if isinstance(outcome, FileError):
        return f"<ERROR: {outcome.reason}>"
    return outcome


def format_record(result: ResultItem, *, separator: str = DEFAULT_SEPARATOR, hash_first: bool = False) -> bytes:
    """Return the output line for ``result`` including the trailing newline.

    Paths are encoded with :func:`os.fsencode` so names that are not valid
    UTF-8 are written back exactly as the filesystem stores them.

    Args:
        result: Result to render.
        separator: Text placed between the two columns.
        hash_first: Put the digest before the path, as ``md5sum`` does.

    Returns:
        bytes: Encoded record.
    """

    path = os.fsencode(result.path)
    digest = format_outcome(result.outcome).encode("utf-8", "backslashreplace")
    sep = separator.encode("utf-8")
    first, second = (digest, path) if hash_first else (path, digest)
    return first + sep + second + b"\n"


@dataclass(slots=True)
class OutputSink:
    """Write records to a binary stream in the order they are received."""

    stream: BinaryIO
    separator: str = DEFAULT_SEPARATOR
    hash_first: bool = False
    line_buffered: bool = False

    def __call__(self, result: ResultItem) -> None:
        """Write ``result`` as one line."""

        record = format_record(result, separator=self.separator, hash_first=self.hash_first)
        self.stream.write(record)
        if self.line_buffered:
            self.stream.flush()

    def flush(self) -> None:
        """Flush the underlying stream."""

        self.stream.flush()


__all__ = ["OutputSink", "format_outcome", "format_record"]
