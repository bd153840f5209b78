# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Wire a path source, hashing workers and the ordered collector together."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from queue import SimpleQueue
from threading import Event, Thread
from typing import TYPE_CHECKING

from ..errors import QueueClosedUnexpectedly
from ..models import ResultItem
from .collector import OrderedCollector, ResultSink
from .dispatch import DispatchQueue
from .workers import HashingWorkerPool, HashPath, WorkerExit, WorkerMessage

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from ..discovery.base import PathSource

LOGGER = logging.getLogger(__name__)

ResultObserver = Callable[[ResultItem], None]


@dataclass(slots=True)
class RunSummary:
    """Counters describing a finished or aborted run.

    Attributes:
        files: Results emitted to the output sink.
        bytes: Bytes hashed across emitted results.
        errors: Emitted results carrying a file error.
        elapsed: Wall-clock seconds spent in :meth:`HashPipeline.run`.
        unprocessed: Items produced by the source but never emitted.
        cancelled: ``True`` when the run was torn down early.
    """

    files: int = 0
    bytes: int = 0
    errors: int = 0
    elapsed: float = 0.0
    unprocessed: int = 0
    cancelled: bool = False

    def record(self, result: ResultItem) -> None:
        """Fold an emitted ``result`` into the counters."""

        self.files += 1
        self.bytes += result.size
        if not result.ok:
            self.errors += 1


@dataclass(slots=True)
class _RunState:
    cancel: Event = field(default_factory=Event)
    failures: list[BaseException] = field(default_factory=list)
    interrupted: bool = False


class HashPipeline:
    """Discover, hash and emit files in discovery order.

    The source runs on its own producer thread and feeds a dispatch queue
    drained by a fixed pool of hashing threads. Results fan in to the thread
    that called :meth:`run`, which reorders them and hands them to ``sink``.
    """

    def __init__(
        self,
        source: PathSource,
        hash_path: HashPath,
        sink: ResultSink,
        *,
        worker_count: int,
        buffer_factor: float,
        observer: ResultObserver | None = None,
    ) -> None:
        """Create a pipeline.

        Args:
            source: Strategy producing paths in output order.
            hash_path: Callable returning the digest of a path.
            sink: Callable receiving results in order.
            worker_count: Number of hashing threads.
            buffer_factor: Multiplier sizing bounded dispatch queues.
            observer: Optional callable notified after each emission.
        """

        self.source = source
        self.sink = sink
        self.observer = observer
        self.worker_count = worker_count
        self.buffer_factor = buffer_factor
        self.pool = HashingWorkerPool(worker_count, hash_path)
        self.queue: DispatchQueue = source.create_queue(worker_count, buffer_factor)
        self.summary = RunSummary()

    def run(self) -> RunSummary:
        """Run the pipeline to completion.

        Returns:
            RunSummary: Counters for the completed run.

        Raises:
            SourceError: If the source failed; results produced before the
                failure have been emitted and :attr:`summary` is populated.
            QueueClosedUnexpectedly: If results were lost or duplicated.
            KeyboardInterrupt: If interrupted; :attr:`summary` is populated.
        """

        started = time.perf_counter()
        state = _RunState()
        results: SimpleQueue[WorkerMessage] = SimpleQueue()
        collector = OrderedCollector(self._emit)
        producer = Thread(
            target=self._produce,
            args=(state,),
            name=f"recursum-{self.source.identifier}",
            daemon=True,
        )
        producer.start()
        self.pool.start(self.queue, results, state.cancel)
        try:
            self._collect(results, collector, state)
        finally:
            self.summary.elapsed = time.perf_counter() - started
        if not state.cancel.is_set():
            # Workers only stop uncancelled once the source closed the queue.
            producer.join()
        if state.cancel.is_set() or state.failures:
            self._abort(collector, state, producer)
        self.pool.join()
        collector.finish(self.source.produced)
        return self.summary

    def _produce(self, state: _RunState) -> None:
        try:
            count = self.source.produce(self.queue, state.cancel)
        except Exception as exc:  # noqa: BLE001 - re-raised on the collecting thread
            LOGGER.debug("%s source failed", self.source.identifier, exc_info=True)
            state.failures.append(exc)
            self._cancel(state)
        else:
            LOGGER.debug("%s source produced %d paths", self.source.identifier, count)

    def _collect(
        self,
        results: SimpleQueue[WorkerMessage],
        collector: OrderedCollector,
        state: _RunState,
    ) -> None:
        live = self.worker_count
        while live:
            try:
                message = results.get()
                if isinstance(message, WorkerExit):
                    live -= 1
                    if message.error is not None:
                        state.failures.append(message.error)
                        self._cancel(state)
                elif not state.interrupted:
                    collector.accept(message)
            except KeyboardInterrupt:
                # Output stops at the interrupt; remaining results are drained and dropped.
                state.interrupted = True
                self._cancel(state)

    def _abort(self, collector: OrderedCollector, state: _RunState, producer: Thread) -> None:
        dropped = self.queue.cancel()
        stranded = collector.flush_orderable()
        # A producer blocked reading stdin cannot be interrupted; leave it behind.
        producer.join(timeout=0.1)
        self.summary.cancelled = True
        self.summary.unprocessed = max(0, self.source.produced - collector.emitted)
        LOGGER.debug(
            "run cancelled: %d queued items dropped, %d results stranded",
            dropped,
            stranded,
        )
        if state.interrupted:
            raise KeyboardInterrupt
        if state.failures:
            raise state.failures[0]
        raise QueueClosedUnexpectedly("run cancelled without a recorded cause")

    def _cancel(self, state: _RunState) -> None:
        state.cancel.set()
        self.queue.cancel()

    def _emit(self, result: ResultItem) -> None:
        self.sink(result)
        self.summary.record(result)
        if self.observer is not None:
            self.observer(result)


__all__ = ["HashPipeline", "ResultObserver", "RunSummary"]
