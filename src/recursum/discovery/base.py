# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Abstractions shared by the path source strategies."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from threading import Event, Lock

from ..models import PathItem
from ..pipeline.dispatch import DispatchQueue

LOGGER = logging.getLogger(__name__)


class Sequencer:
    """Assign dense, monotonically increasing indices to discovered paths.

    Every path leaves its source through a single sequencer so the output
    order is fixed at discovery time, whatever thread found the path.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._next_index = 0

    @property
    def issued(self) -> int:
        """Return how many indices have been handed out."""

        with self._lock:
            return self._next_index

    def issue(self, path: str) -> PathItem:
        """Return a :class:`PathItem` for ``path`` carrying the next index.

        Args:
            path: Path to wrap.

        Returns:
            PathItem: Item whose index is one greater than the previous one.
        """

        with self._lock:
            item = PathItem(sequence_index=self._next_index, path=path)
            self._next_index += 1
        return item


class PathSource(ABC):
    """Produce an ordered, possibly lazy, sequence of file paths."""

    def __init__(self) -> None:
        self._sequencer = Sequencer()

    @property
    @abstractmethod
    def identifier(self) -> str:
        """Return a short name describing the strategy."""

    @abstractmethod
    def queue_capacity(self, worker_count: int, factor: float) -> int | None:
        """Return the dispatch queue capacity suited to this source.

        Args:
            worker_count: Number of hashing workers draining the queue.
            factor: Buffer multiplier applied to bounded queues.

        Returns:
            int | None: Capacity, or ``None`` for an unbounded queue.
        """

    @abstractmethod
    def discover(self, cancel: Event) -> Iterator[str]:
        """Yield paths in output order until exhausted or ``cancel`` is set.

        Args:
            cancel: Event set when the run is being torn down.

        Yields:
            str: Paths to hash.

        Raises:
            SourceError: If the source cannot continue.
        """

    @property
    def produced(self) -> int:
        """Return the number of items produced so far."""

        return self._sequencer.issued

    def create_queue(self, worker_count: int, factor: float) -> DispatchQueue:
        """Return a dispatch queue sized by :meth:`queue_capacity`."""

        return DispatchQueue(self.queue_capacity(worker_count, factor))

    def produce(self, queue: DispatchQueue, cancel: Event) -> int:
        """Push every discovered path onto ``queue`` then close it.

        The queue is closed even when discovery fails so workers always see
        the end of the stream.

        Args:
            queue: Dispatch queue feeding the hashing workers.
            cancel: Event set when the run is being torn down.

        Returns:
            int: Number of items pushed.
        """

        paths = self.discover(cancel)
        try:
            for path in paths:
                if cancel.is_set():
                    break
                if not queue.put(self._sequencer.issue(path)):
                    LOGGER.debug("dispatch queue closed; %s source stopping", self.identifier)
                    break
        finally:
            close = getattr(paths, "close", None)
            if close is not None:
                close()
            queue.close()
        return self.produced


__all__ = ["PathSource", "Sequencer"]
