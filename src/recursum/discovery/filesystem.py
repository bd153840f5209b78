# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Depth-first directory walk with parallel directory listing."""

from __future__ import annotations

import logging
import os
from collections import deque
from collections.abc import Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from threading import Event

from ..config import queue_length
from ..errors import SourceError
from .base import PathSource

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DirectoryEntry:
    """Regular file or directory found while listing a directory."""

    name: str
    is_dir: bool


def list_directory(path: str) -> list[DirectoryEntry]:
    """Return the regular files and sub-directories of ``path`` sorted by name.

    Symlinks and special files are omitted. Entries whose type cannot be
    determined (for example because they vanished mid-listing) are skipped.

    Args:
        path: Directory to list.

    Returns:
        list[DirectoryEntry]: Entries in name order.

    Raises:
        OSError: If the directory itself cannot be opened.
    """

    entries: list[DirectoryEntry] = []
    with os.scandir(path) as iterator:
        for entry in iterator:
            try:
                if entry.is_symlink():
                    continue
                if entry.is_dir(follow_symlinks=False):
                    entries.append(DirectoryEntry(entry.name, True))
                elif entry.is_file(follow_symlinks=False):
                    entries.append(DirectoryEntry(entry.name, False))
            except OSError as exc:
                LOGGER.debug("skipping %s: %s", entry.path, exc)
    entries.sort(key=lambda item: item.name)
    return entries


class _DirectoryFrame:
    """One directory on the depth-first stack.

    Listings for upcoming sub-directories are requested from the walker pool
    ahead of time, at most ``lookahead`` at once, so listing overlaps with the
    hashing of earlier files while memory stays proportional to the lookahead.
    """

    def __init__(
        self,
        path: str,
        entries: list[DirectoryEntry],
        pool: ThreadPoolExecutor,
        lookahead: int,
    ) -> None:
        self.path = path
        self._entries = iter(entries)
        self._pool = pool
        self._lookahead = lookahead
        self._upcoming: deque[str] = deque(entry.name for entry in entries if entry.is_dir)
        self._listings: dict[str, Future[list[DirectoryEntry]]] = {}
        self._prefetch()

    def next_entry(self) -> DirectoryEntry | None:
        return next(self._entries, None)

    def listing(self, name: str) -> list[DirectoryEntry]:
        """Return the listing of sub-directory ``name``, waiting if needed."""

        future = self._listings.pop(name)
        self._prefetch()
        return future.result()

    def _prefetch(self) -> None:
        while self._upcoming and len(self._listings) < self._lookahead:
            name = self._upcoming.popleft()
            self._listings[name] = self._pool.submit(list_directory, os.path.join(self.path, name))


class DirectoryWalkSource(PathSource):
    """Yield every regular file below ``root`` in depth-first name order.

    Directory listings run on ``walker_count`` threads. The generator driving
    the walk is the only consumer of those listings, so the order in which
    paths leave this source is the depth-first order regardless of which
    walker finished first.
    """

    def __init__(self, root: str, *, walker_count: int = 1) -> None:
        """Create a walk rooted at ``root``.

        Args:
            root: Directory to walk. Reported paths are joined onto it as given.
            walker_count: Number of threads listing directories.

        Raises:
            ValueError: If ``walker_count`` is smaller than ``1``.
        """

        super().__init__()
        if walker_count < 1:
            raise ValueError("walker_count must be at least 1")
        self.root = root
        self.walker_count = walker_count

    @property
    def identifier(self) -> str:
        return "directory"

    def queue_capacity(self, worker_count: int, factor: float) -> int | None:
        return queue_length(worker_count, factor)

    def discover(self, cancel: Event) -> Iterator[str]:
        if not os.path.isdir(self.root):
            raise SourceError(f"not a directory: {self.root}")
        pool = ThreadPoolExecutor(max_workers=self.walker_count, thread_name_prefix="recursum-walk")
        try:
            try:
                root_entries = pool.submit(list_directory, self.root).result()
            except OSError as exc:
                raise SourceError(f"cannot read directory {self.root}: {exc}") from exc
            stack = [_DirectoryFrame(self.root, root_entries, pool, self.walker_count * 2)]
            while stack and not cancel.is_set():
                frame = stack[-1]
                entry = frame.next_entry()
                if entry is None:
                    stack.pop()
                    continue
                path = os.path.join(frame.path, entry.name)
                if not entry.is_dir:
                    yield path
                    continue
                try:
                    entries = frame.listing(entry.name)
                except OSError as exc:
                    LOGGER.warning("skipping directory %s: %s", path, exc.strerror or exc)
                    continue
                stack.append(_DirectoryFrame(path, entries, pool, self.walker_count * 2))
        finally:
            pool.shutdown(wait=True, cancel_futures=True)


__all__ = ["DirectoryEntry", "DirectoryWalkSource", "list_directory"]
