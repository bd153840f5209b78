# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Fixed-size pool of hashing threads draining the dispatch queue."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from queue import SimpleQueue
from threading import Event, Thread, current_thread
from typing import Final

from ..digest import FileDigest
from ..models import FileError, PathItem, ResultItem
from .dispatch import DispatchQueue

LOGGER = logging.getLogger(__name__)

HashPath = Callable[[str], FileDigest]


@dataclass(frozen=True, slots=True)
class WorkerExit:
    """Sentinel posted by a worker when it stops pulling items.

    Attributes:
        name: Thread name of the exiting worker.
        error: Unexpected exception that killed the worker, if any.
    """

    name: str
    error: BaseException | None = None


WorkerMessage = ResultItem | WorkerExit

_THREAD_PREFIX: Final[str] = "recursum-hash"


def hash_item(item: PathItem, hash_path: HashPath) -> ResultItem:
    """Hash ``item`` and wrap the outcome in a :class:`ResultItem`.

    Failures to open or read the file are recorded as a :class:`FileError`
    outcome instead of being raised.

    Args:
        item: Work item taken from the dispatch queue.
        hash_path: Callable returning the digest of a path.

    Returns:
        ResultItem: Result carrying the item's sequence index.
    """

    try:
        digest = hash_path(item.path)
    except OSError as exc:
        return ResultItem(item.sequence_index, item.path, FileError.from_exception(exc))
    except ValueError as exc:
        # ``open`` rejects paths with embedded NUL bytes with ValueError.
        return ResultItem(item.sequence_index, item.path, FileError(reason=str(exc)))
    return ResultItem(item.sequence_index, item.path, digest.digest, digest.size)


class HashingWorkerPool:
    """Run ``worker_count`` threads that hash items from a dispatch queue.

    Each worker hashes one file at a time and posts the result on the shared
    ``results`` channel, followed by a :class:`WorkerExit` once the queue is
    exhausted or the run is cancelled.
    """

    def __init__(self, worker_count: int, hash_path: HashPath) -> None:
        """Create an idle pool.

        Args:
            worker_count: Number of hashing threads.
            hash_path: Callable returning the digest of a path.

        Raises:
            ValueError: If ``worker_count`` is smaller than ``1``.
        """

        if worker_count < 1:
            raise ValueError("worker_count must be at least 1")
        self.worker_count = worker_count
        self._hash_path = hash_path
        self._threads: list[Thread] = []

    def start(
        self,
        queue: DispatchQueue,
        results: SimpleQueue[WorkerMessage],
        cancel: Event,
    ) -> None:
        """Start the worker threads.

        Args:
            queue: Queue supplying work items.
            results: Fan-in channel receiving results and exit sentinels.
            cancel: Event that stops workers from taking new items.

        Raises:
            RuntimeError: If the pool was already started.
        """

        if self._threads:
            raise RuntimeError("worker pool already started")
        for number in range(self.worker_count):
            thread = Thread(
                target=self._work,
                args=(queue, results, cancel),
                name=f"{_THREAD_PREFIX}-{number}",
                daemon=True,
            )
            self._threads.append(thread)
            thread.start()

    def join(self) -> None:
        """Wait for every worker thread to exit."""

        for thread in self._threads:
            thread.join()

    def _work(
        self,
        queue: DispatchQueue,
        results: SimpleQueue[WorkerMessage],
        cancel: Event,
    ) -> None:
        error: BaseException | None = None
        try:
            while not cancel.is_set():
                item = queue.get()
                if item is None:
                    break
                results.put(hash_item(item, self._hash_path))
        except Exception as exc:  # noqa: BLE001 - reported to the collecting thread
            LOGGER.debug("hash worker crashed", exc_info=True)
            error = exc
        finally:
            results.put(WorkerExit(name=current_thread().name, error=error))


__all__ = ["HashPath", "HashingWorkerPool", "WorkerExit", "WorkerMessage", "hash_item"]
