# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Output and progress sinks."""

from __future__ import annotations

from .output import OutputSink, format_outcome, format_record
from .progress import ProgressReporter, format_duration, format_summary

__all__ = [
    "OutputSink",
    "ProgressReporter",
    "format_duration",
    "format_outcome",
    "format_record",
    "format_summary",
]
