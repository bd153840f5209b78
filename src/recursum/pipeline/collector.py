# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reorder buffer restoring discovery order to out-of-order results."""

from __future__ import annotations

from collections.abc import Callable

from ..errors import QueueClosedUnexpectedly
from ..models import ResultItem

ResultSink = Callable[[ResultItem], None]


class OrderedCollector:
    """Emit results strictly in ``sequence_index`` order.

    Results are parked in a pending window until every lower index has been
    emitted. The collector is driven by a single thread and does no locking
    of its own.
    """

    def __init__(self, sink: ResultSink) -> None:
        """Create a collector forwarding ordered results to ``sink``.

        Args:
            sink: Callable invoked once per result, in index order.
        """

        self._sink = sink
        self._pending: dict[int, ResultItem] = {}
        self._next_emit_index = 0
        self._received = 0

    @property
    def next_emit_index(self) -> int:
        """Return the index the collector is waiting on."""

        return self._next_emit_index

    @property
    def emitted(self) -> int:
        """Return the number of results forwarded to the sink."""

        return self._next_emit_index

    @property
    def received(self) -> int:
        """Return the number of results accepted so far."""

        return self._received

    @property
    def pending(self) -> tuple[int, ...]:
        """Return the sorted indices waiting in the pending window."""

        return tuple(sorted(self._pending))

    def accept(self, result: ResultItem) -> int:
        """Add ``result`` and emit every result that is now in order.

        Args:
            result: Completed result from any worker.

        Returns:
            int: Number of results emitted by this call.

        Raises:
            QueueClosedUnexpectedly: If the index was already emitted or is
                already pending.
        """

        index = result.sequence_index
        if index < self._next_emit_index or index in self._pending:
            raise QueueClosedUnexpectedly(f"duplicate result for sequence index {index} ({result.path})")
        self._pending[index] = result
        self._received += 1
        emitted = 0
        while self._next_emit_index in self._pending:
            ready = self._pending.pop(self._next_emit_index)
            self._sink(ready)
            self._next_emit_index += 1
            emitted += 1
        return emitted

    def finish(self, expected: int) -> None:
        """Confirm that exactly ``expected`` results were emitted.

        Args:
            expected: Number of items produced by the path source.

        Raises:
            QueueClosedUnexpectedly: If results are missing, stranded behind a
                gap, or more results arrived than were produced.
        """

        if self._pending:
            missing = self._next_emit_index
            raise QueueClosedUnexpectedly(
                f"result for sequence index {missing} never arrived; {len(self._pending)} results stranded",
            )
        if self._next_emit_index != expected:
            raise QueueClosedUnexpectedly(
                f"expected {expected} results but emitted {self._next_emit_index}",
            )

    def flush_orderable(self) -> int:
        """Drop results that cannot be emitted because of a gap.

        Everything contiguous with ``next_emit_index`` has already been
        emitted by :meth:`accept`, so whatever remains is stranded.

        Returns:
            int: Number of results discarded.
        """

        stranded = len(self._pending)
        self._pending.clear()
        return stranded


__all__ = ["OrderedCollector", "ResultSink"]
