# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy for the hashing pipeline."""

from __future__ import annotations


class RecursumError(RuntimeError):
    """Base class for errors raised by recursum."""


class ConfigError(RecursumError):
    """Raised when a run configuration is invalid."""


class SourceError(RecursumError):
    """Raised when a path source cannot proceed and the run must abort."""


class QueueClosedUnexpectedly(RecursumError):
    """Raised when the pipeline loses or duplicates work items.

    This signals a broken internal invariant rather than a user error.
    """


__all__ = [
    "ConfigError",
    "QueueClosedUnexpectedly",
    "RecursumError",
    "SourceError",
]
