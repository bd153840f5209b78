# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Work items exchanged between pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PathItem:
    """A discovered file paired with its position in the output order.

    Attributes:
        sequence_index: Dense, zero-based position assigned by the path source.
        path: Filesystem path exactly as it will be reported.
    """

    sequence_index: int
    path: str


@dataclass(frozen=True, slots=True)
class FileError:
    """Describe why a single file could not be hashed."""

    reason: str

    @classmethod
    def from_exception(cls, exc: OSError) -> FileError:
        """Build a ``FileError`` from an ``OSError`` raised while hashing.

        Args:
            exc: Exception raised while opening or reading the file.

        Returns:
            FileError: Error record carrying the OS-level reason.
        """

        reason = exc.strerror or str(exc) or type(exc).__name__
        return cls(reason=reason)


@dataclass(frozen=True, slots=True)
class ResultItem:
    """Outcome of hashing one :class:`PathItem`.

    Attributes:
        sequence_index: Index copied from the originating path item.
        path: Path copied from the originating path item.
        outcome: Hex digest on success, otherwise a :class:`FileError`.
        size: Number of bytes hashed, ``0`` when hashing failed.
    """

    sequence_index: int
    path: str
    outcome: str | FileError
    size: int = 0

    @property
    def ok(self) -> bool:
        """Return ``True`` when the file was hashed successfully."""

        return not isinstance(self.outcome, FileError)


__all__ = ["FileError", "PathItem", "ResultItem"]
