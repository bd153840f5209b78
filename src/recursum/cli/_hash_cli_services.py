# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Service helpers that run a hashing job on behalf of the CLI."""

from __future__ import annotations

import logging
import sys
from typing import BinaryIO

from ..config import HashRunConfig
from ..digest import FileHasher
from ..discovery import build_source
from ..errors import QueueClosedUnexpectedly, SourceError
from ..pipeline import HashPipeline, RunSummary
from ..reporting import OutputSink, ProgressReporter
from .shared import EXIT_FAILURE, EXIT_INTERRUPTED, EXIT_OK, CLILogger

LOGGER = logging.getLogger(__name__)


def _is_tty(stream: BinaryIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def build_pipeline(
    config: HashRunConfig,
    *,
    stream: BinaryIO,
    progress: ProgressReporter,
) -> tuple[HashPipeline, OutputSink]:
    """Assemble the pipeline described by ``config``.

    Args:
        config: Resolved run configuration.
        stream: Binary stream receiving hash records.
        progress: Reporter notified after each record.

    Returns:
        tuple[HashPipeline, OutputSink]: Pipeline ready to run and its sink.

    Raises:
        SourceError: If the configured input cannot be used.
    """

    source = build_source(config)
    sink = OutputSink(
        stream=stream,
        separator=config.separator,
        hash_first=config.hash_first,
        line_buffered=_is_tty(stream),
    )
    hasher = FileHasher(algorithm=config.algorithm, digest_length=config.digest_max_length)
    pipeline = HashPipeline(
        source,
        hasher,
        sink,
        worker_count=config.worker_count,
        buffer_factor=config.queue_capacity_factor,
        observer=progress.observe,
    )
    LOGGER.debug(
        "mode=%s workers=%d walkers=%d queue=%s algorithm=%s",
        config.mode.value,
        config.worker_count,
        config.walker_count,
        pipeline.queue.capacity or "unbounded",
        config.algorithm.value,
    )
    return pipeline, sink


def run_hash_job(
    config: HashRunConfig,
    *,
    logger: CLILogger,
    stream: BinaryIO | None = None,
) -> int:
    """Hash every input described by ``config`` and return an exit status.

    Args:
        config: Resolved run configuration.
        logger: CLI logger used for fatal diagnostics.
        stream: Destination for hash records; defaults to binary stdout.

    Returns:
        int: ``0`` when every item was processed, even if some files could
        not be read; non-zero after a fatal error or an interrupt.
    """

    output = stream if stream is not None else sys.stdout.buffer
    progress = ProgressReporter(quiet=config.quiet, use_color=logger.use_color)
    try:
        pipeline, sink = build_pipeline(config, stream=output, progress=progress)
    except SourceError as exc:
        logger.fail(str(exc))
        return EXIT_FAILURE

    progress.start()
    try:
        summary = pipeline.run()
    except SourceError as exc:
        _abandon(sink, progress)
        logger.fail(str(exc))
        _report_unprocessed(pipeline.summary, logger)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        _abandon(sink, progress)
        logger.warn("interrupted")
        _report_unprocessed(pipeline.summary, logger)
        return EXIT_INTERRUPTED
    except QueueClosedUnexpectedly as exc:
        _abandon(sink, progress)
        logger.fail(f"internal error: {exc}")
        return EXIT_FAILURE
    sink.flush()
    progress.finish(summary)
    return EXIT_OK


def _abandon(sink: OutputSink, progress: ProgressReporter) -> None:
    sink.flush()
    progress.stop()


def _report_unprocessed(summary: RunSummary, logger: CLILogger) -> None:
    if summary.unprocessed:
        logger.warn(f"{summary.unprocessed} items were not processed")


__all__ = ["build_pipeline", "run_hash_job"]
