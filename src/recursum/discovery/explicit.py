# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Path source backed by an explicit list of paths."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from threading import Event

from .base import PathSource


class ExplicitListSource(PathSource):
    """Yield the given paths in argument order.

    Nothing is checked up front; a missing or unreadable entry is reported
    by the worker that fails to hash it.
    """

    def __init__(self, paths: Sequence[str]) -> None:
        super().__init__()
        self.paths = tuple(paths)

    @property
    def identifier(self) -> str:
        return "files"

    def queue_capacity(self, worker_count: int, factor: float) -> int | None:
        # The whole list fits, so the producer never waits.
        return max(1, len(self.paths))

    def discover(self, cancel: Event) -> Iterator[str]:
        for path in self.paths:
            if cancel.is_set():
                return
            yield path


__all__ = ["ExplicitListSource"]
