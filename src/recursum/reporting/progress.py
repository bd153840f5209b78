# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Progress rendering and run summaries on stderr."""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from typing import TYPE_CHECKING

from rich.filesize import decimal
from rich.progress import (
    FileSizeColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TransferSpeedColumn,
)

from ..console import detect_tty, get_console_manager
from ..models import ResultItem

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from rich.console import Console

    from ..pipeline.runner import RunSummary


def format_duration(seconds: float) -> str:
    """Return ``seconds`` as a short human readable duration.

    Args:
        seconds: Elapsed wall-clock time.

    Returns:
        str: Text such as ``"850ms"``, ``"4.2s"`` or ``"1h 02m 05s"``.
    """

    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, secs = divmod(int(seconds), 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}h {minutes:02d}m {secs:02d}s"
    return f"{minutes}m {secs:02d}s"


def format_summary(summary: RunSummary) -> str:
    """Return the one-line summary printed when a run ends.

    Args:
        summary: Counters collected by the pipeline.

    Returns:
        str: Summary with file count, volume, duration and throughput.
    """

    elapsed = summary.elapsed
    rate = int(summary.bytes / elapsed) if elapsed > 0 else summary.bytes
    text = (
        f"{summary.files} files ({decimal(summary.bytes)}) hashed in {format_duration(elapsed)} ({decimal(rate)}/s)"
    )
    if summary.errors:
        text += f", {summary.errors} errors"
    if summary.unprocessed:
        text += f", {summary.unprocessed} not processed"
    return text


@dataclass(slots=True)
class ProgressContext:
    """Runtime context required to render hashing progress."""

    progress: Progress
    task_id: TaskID
    lock: Lock


@dataclass(slots=True)
class ProgressReporter:
    """Show a transient spinner while hashing and a summary at the end.

    Nothing here touches stdout, so enabling or disabling progress never
    changes the hash records.
    """

    quiet: bool = False
    is_terminal: bool = field(default_factory=detect_tty)
    use_color: bool = True
    progress_factory: type[Progress] = Progress
    console: Console = field(init=False)
    context: ProgressContext | None = field(init=False, default=None)
    started: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        self.console = get_console_manager().get(color=self.use_color, emoji=False)
        if self.quiet or not self.is_terminal:
            return
        progress = self.progress_factory(
            SpinnerColumn(),
            FileSizeColumn(),
            TimeElapsedColumn(),
            TransferSpeedColumn(),
            TextColumn("{task.fields[current]}", markup=False),
            console=self.console,
            transient=True,
        )
        task_id = progress.add_task("Hashing", total=None, current="")
        self.context = ProgressContext(progress=progress, task_id=task_id, lock=Lock())

    @property
    def enabled(self) -> bool:
        """Return ``True`` when the live spinner is active."""

        return self.context is not None

    def start(self) -> None:
        """Start the live display when progress is enabled."""

        if self.context is None or self.started:
            return
        with self.context.lock:
            self.context.progress.start()
            self.started = True

    def observe(self, result: ResultItem) -> None:
        """Advance the display after ``result`` has been written."""

        if self.context is None:
            return
        with self.context.lock:
            self.context.progress.update(
                self.context.task_id,
                advance=result.size,
                current=f"{decimal(result.size)} {result.path}",
            )

    def stop(self) -> None:
        """Stop the live display if it was started."""

        if self.context is None or not self.started:
            return
        with self.context.lock:
            self.context.progress.stop()
            self.started = False

    def finish(self, summary: RunSummary) -> None:
        """Stop the display and print the run summary unless quiet.

        Args:
            summary: Counters collected by the pipeline.
        """

        self.stop()
        if not self.quiet:
            self.console.print(format_summary(summary))


__all__ = ["ProgressContext", "ProgressReporter", "format_duration", "format_summary"]
