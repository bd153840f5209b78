# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for run configuration and input classification."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from recursum.config import (
    COMPATIBLE_SEPARATOR,
    DEFAULT_SEPARATOR,
    HashRunConfig,
    InputMode,
    default_parallelism,
    detect_mode,
    queue_length,
    resolve_separator,
)
from recursum.digest import HashAlgorithm
from recursum.errors import ConfigError


def test_defaults_follow_available_parallelism() -> None:
    config = HashRunConfig.build(mode=InputMode.STDIN)

    assert config.worker_count == default_parallelism()
    assert config.walker_count == default_parallelism()
    assert config.separator == DEFAULT_SEPARATOR
    assert config.algorithm is HashAlgorithm.BLAKE2B
    assert config.digest_max_length is None


def test_queue_capacity_rounds_up_and_never_hits_zero() -> None:
    assert queue_length(4, 3.0) == 12
    assert queue_length(3, 0.5) == 2
    assert queue_length(1, 0.01) == 1
    config = HashRunConfig.build(mode=InputMode.STDIN, worker_count=2, queue_capacity_factor=2.0)
    assert config.queue_capacity == 4


@pytest.mark.parametrize(
    ("values", "fragment"),
    [
        ({"mode": InputMode.STDIN, "worker_count": 0}, "worker_count"),
        ({"mode": InputMode.STDIN, "queue_capacity_factor": 0}, "queue_capacity_factor"),
        ({"mode": InputMode.STDIN, "digest_max_length": 0}, "digest_max_length"),
        ({"mode": InputMode.STDIN, "separator": ""}, "separator"),
        ({"mode": InputMode.FILES}, "requires at least one input"),
        ({"mode": InputMode.DIRECTORY, "inputs": ("a", "b")}, "exactly one root"),
        ({"mode": InputMode.STDIN, "inputs": ("a",)}, "stdin"),
        ({"mode": InputMode.STDIN, "colour": True}, "colour"),
    ],
)
def test_invalid_values_raise_config_error(values: dict[str, object], fragment: str) -> None:
    with pytest.raises(ConfigError, match=fragment):
        HashRunConfig.build(**values)


def test_config_is_immutable() -> None:
    config = HashRunConfig.build(mode=InputMode.STDIN)

    with pytest.raises(ValidationError):
        config.quiet = True  # type: ignore[misc]


def test_resolve_separator_policy() -> None:
    assert resolve_separator(None, compatible=False) == DEFAULT_SEPARATOR
    assert resolve_separator(None, compatible=True) == COMPATIBLE_SEPARATOR
    assert resolve_separator(",", compatible=True) == ","
    assert resolve_separator("\\t", compatible=False) == "\t"
    assert resolve_separator("\\0", compatible=False) == "\0"
    assert resolve_separator(" | ", compatible=False) == " | "


def test_detect_mode(tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_text("x", encoding="utf-8")

    assert detect_mode(["-"]) is InputMode.STDIN
    assert detect_mode([str(tmp_path)]) is InputMode.DIRECTORY
    assert detect_mode([str(target)]) is InputMode.FILES
    assert detect_mode([str(target), str(tmp_path / "missing")]) is InputMode.FILES


@pytest.mark.parametrize(
    "inputs",
    [
        [],
        ["-", "other"],
    ],
)
def test_detect_mode_rejects_bad_combinations(inputs: list[str]) -> None:
    with pytest.raises(ConfigError):
        detect_mode(inputs)


def test_detect_mode_rejects_directory_mixed_with_files(tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_text("x", encoding="utf-8")

    with pytest.raises(ConfigError, match="only input"):
        detect_mode([str(target), str(tmp_path)])
