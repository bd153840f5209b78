# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolved run configuration consumed by the hashing pipeline."""

from __future__ import annotations

import math
import os
from collections.abc import Mapping, Sequence
from enum import StrEnum
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic_core import ErrorDetails

from .digest import HashAlgorithm
from .errors import ConfigError

DEFAULT_SEPARATOR: Final[str] = "\t"
COMPATIBLE_SEPARATOR: Final[str] = "  "
DEFAULT_BUFFER_FACTOR: Final[float] = 3.0
STDIN_MARKER: Final[str] = "-"

_SEPARATOR_ESCAPES: Final[Mapping[str, str]] = {
    "\\t": "\t",
    "\\0": "\0",
}


class InputMode(StrEnum):
    """Enumerate the strategies used to discover input paths."""

    DIRECTORY = "directory"
    FILES = "files"
    STDIN = "stdin"


def default_parallelism() -> int:
    """Return the number of CPUs available to this process.

    Returns:
        int: Available parallelism, never less than ``1``.
    """

    try:
        return max(1, len(os.sched_getaffinity(0)))
    except AttributeError:  # pragma: no cover - platforms without affinity support
        return max(1, os.cpu_count() or 1)


def queue_length(worker_count: int, factor: float) -> int:
    """Return the dispatch queue capacity for ``worker_count`` workers.

    Args:
        worker_count: Number of hashing workers.
        factor: Multiplier applied to the worker count.

    Returns:
        int: Capacity rounded up, never less than ``1``.
    """

    return max(1, math.ceil(worker_count * factor))


def resolve_separator(separator: str | None, *, compatible: bool) -> str:
    """Return the field separator for output records.

    An explicit separator always wins. Without one, compatible mode selects the
    double space used by ``md5sum``-style tools and the default mode uses tab.

    Args:
        separator: Raw value supplied by the user, possibly an escape sequence.
        compatible: Whether compatible (digest-first) output was requested.

    Returns:
        str: Separator text inserted between path and digest.
    """

    if separator is None:
        return COMPATIBLE_SEPARATOR if compatible else DEFAULT_SEPARATOR
    return _SEPARATOR_ESCAPES.get(separator, separator)


class HashRunConfig(BaseModel):
    """Immutable settings for a single hashing run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    mode: InputMode
    inputs: tuple[str, ...] = Field(default_factory=tuple)
    worker_count: int = Field(default_factory=default_parallelism, ge=1)
    walker_count: int = Field(default_factory=default_parallelism, ge=1)
    queue_capacity_factor: float = Field(default=DEFAULT_BUFFER_FACTOR, gt=0)
    digest_max_length: int | None = Field(default=None, ge=1)
    separator: str = DEFAULT_SEPARATOR
    hash_first: bool = False
    quiet: bool = False
    algorithm: HashAlgorithm = HashAlgorithm.BLAKE2B

    @model_validator(mode="after")
    def _check_inputs(self) -> HashRunConfig:
        if not self.separator:
            raise ValueError("separator must not be empty")
        if self.mode is InputMode.STDIN:
            if self.inputs not in ((), (STDIN_MARKER,)):
                raise ValueError("stdin mode does not accept explicit inputs")
        elif not self.inputs:
            raise ValueError(f"{self.mode.value} mode requires at least one input")
        if self.mode is InputMode.DIRECTORY and len(self.inputs) != 1:
            raise ValueError("directory mode accepts exactly one root")
        return self

    @property
    def queue_capacity(self) -> int:
        """Return the bounded dispatch queue capacity for directory walks."""

        return queue_length(self.worker_count, self.queue_capacity_factor)

    @classmethod
    def build(cls, **values: object) -> HashRunConfig:
        """Validate ``values`` and return a configuration.

        Args:
            **values: Field values accepted by the model.

        Returns:
            HashRunConfig: Validated configuration.

        Raises:
            ConfigError: If validation fails.
        """

        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            messages = "; ".join(_format_validation_error(error) for error in exc.errors())
            raise ConfigError(messages) from exc


def _format_validation_error(error: ErrorDetails) -> str:
    location = ".".join(str(part) for part in error["loc"])
    return f"{location}: {error['msg']}" if location else error["msg"]


def detect_mode(inputs: Sequence[str]) -> InputMode:
    """Classify ``inputs`` into an :class:`InputMode`.

    Args:
        inputs: Raw positional arguments supplied on the command line.

    Returns:
        InputMode: Mode that should be used to discover paths.

    Raises:
        ConfigError: If the inputs cannot be combined, such as a directory
            mixed with files or ``-`` alongside other entries.
    """

    if not inputs:
        raise ConfigError("at least one input is required")
    if STDIN_MARKER in inputs:
        if len(inputs) != 1:
            raise ConfigError("'-' reads paths from stdin and cannot be combined with other inputs")
        return InputMode.STDIN
    if len(inputs) == 1 and Path(inputs[0]).is_dir():
        return InputMode.DIRECTORY
    directories = [entry for entry in inputs if Path(entry).is_dir()]
    if directories:
        raise ConfigError(f"a directory must be the only input: {directories[0]}")
    return InputMode.FILES


__all__ = [
    "COMPATIBLE_SEPARATOR",
    "DEFAULT_BUFFER_FACTOR",
    "DEFAULT_SEPARATOR",
    "STDIN_MARKER",
    "HashRunConfig",
    "InputMode",
    "default_parallelism",
    "detect_mode",
    "queue_length",
    "resolve_separator",
]
