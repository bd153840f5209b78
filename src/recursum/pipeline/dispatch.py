# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Closable FIFO channel between path sources and hashing workers."""

from __future__ import annotations

from collections import deque
from threading import Condition

from ..models import PathItem


class DispatchQueue:
    """Multi-consumer FIFO of :class:`PathItem` with optional capacity.

    A bounded queue blocks producers while full, which is what stops a
    directory walk from racing ahead of the hashing workers. An unbounded
    queue never blocks producers. Consumers block while the queue is empty
    and open, and receive ``None`` once it is closed and drained.
    """

    def __init__(self, capacity: int | None = None) -> None:
        """Create a queue holding at most ``capacity`` items.

        Args:
            capacity: Maximum number of buffered items, ``None`` for unbounded.

        Raises:
            ValueError: If ``capacity`` is smaller than ``1``.
        """

        if capacity is not None and capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._items: deque[PathItem] = deque()
        self._condition = Condition()
        self._closed = False
        self._cancelled = False
        self._high_water_mark = 0

    @property
    def capacity(self) -> int | None:
        """Return the configured capacity, ``None`` when unbounded."""

        return self._capacity

    @property
    def bounded(self) -> bool:
        """Return ``True`` when producers can be blocked by a full queue."""

        return self._capacity is not None

    @property
    def closed(self) -> bool:
        """Return ``True`` once :meth:`close` or :meth:`cancel` has run."""

        with self._condition:
            return self._closed

    @property
    def cancelled(self) -> bool:
        """Return ``True`` once :meth:`cancel` has run."""

        with self._condition:
            return self._cancelled

    @property
    def high_water_mark(self) -> int:
        """Return the largest number of items ever buffered at once."""

        with self._condition:
            return self._high_water_mark

    def __len__(self) -> int:
        with self._condition:
            return len(self._items)

    def put(self, item: PathItem) -> bool:
        """Append ``item``, blocking while a bounded queue is full.

        Args:
            item: Work item to hand to the workers.

        Returns:
            bool: ``False`` when the queue was closed before ``item`` could be
            enqueued, signalling the producer to stop.
        """

        with self._condition:
            while not self._closed and self._is_full():
                self._condition.wait()
            if self._closed:
                return False
            self._items.append(item)
            self._high_water_mark = max(self._high_water_mark, len(self._items))
            self._condition.notify_all()
            return True

    def get(self) -> PathItem | None:
        """Remove and return the oldest item, blocking while empty.

        Returns:
            PathItem | None: Next item, or ``None`` once the queue is closed
            and nothing is left to consume.
        """

        with self._condition:
            while not self._items and not self._closed:
                self._condition.wait()
            if not self._items:
                return None
            item = self._items.popleft()
            self._condition.notify_all()
            return item

    def close(self) -> None:
        """Mark the end of input; buffered items remain available."""

        with self._condition:
            self._closed = True
            self._condition.notify_all()

    def cancel(self) -> int:
        """Close the queue and discard anything still buffered.

        Returns:
            int: Number of items dropped.
        """

        with self._condition:
            dropped = len(self._items)
            self._items.clear()
            self._closed = True
            self._cancelled = True
            self._condition.notify_all()
            return dropped

    def _is_full(self) -> bool:
        return self._capacity is not None and len(self._items) >= self._capacity


__all__ = ["DispatchQueue"]
