# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from pathlib import Path
from threading import Lock

import pytest

from recursum.digest import FileDigest, FileHasher
from recursum.models import ResultItem


class RecordingHasher:
    """FileHasher wrapper that can stall on chosen paths and records completions."""

    def __init__(self, delays: Mapping[str, float] | None = None, *, default_delay: float = 0.0) -> None:
        self._hasher = FileHasher()
        self._delays = dict(delays or {})
        self._default_delay = default_delay
        self._lock = Lock()
        self.completed: list[str] = []

    def __call__(self, path: str) -> FileDigest:
        delay = self._delays.get(path, self._default_delay)
        if delay:
            time.sleep(delay)
        try:
            return self._hasher(path)
        finally:
            with self._lock:
                self.completed.append(path)


@pytest.fixture
def recording_hasher() -> Callable[..., RecordingHasher]:
    """Return a factory for :class:`RecordingHasher` instances."""

    return RecordingHasher


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[Mapping[str, str]], Path]:
    """Return a helper writing ``{relative_path: content}`` below a fresh root."""

    def _make(files: Mapping[str, str]) -> Path:
        root = tmp_path / "tree"
        root.mkdir()
        for relative, content in files.items():
            target = root / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def results() -> list[ResultItem]:
    """Return a list usable as an in-order result sink via ``results.append``."""

    return []
