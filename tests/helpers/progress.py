# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers for capturing Rich progress output in tests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ProgressRecord:
    kind: str
    payload: tuple[Any, ...] = ()


@dataclass
class _TaskState:
    description: str
    total: int | None
    completed: int
    fields: dict[str, Any]


class ProgressProxy:
    """Minimal Rich.Progress test double that records operations."""

    records: list[ProgressRecord]
    _tasks: dict[int, _TaskState]
    _next_id: int
    _started: bool

    def __init__(self, *columns: object, **kwargs: object) -> None:
        self.columns = columns
        self.options = dict(kwargs)
        self.records = []
        self._tasks = {}
        self._next_id = 1
        self._started = False

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        self._append("start")

    def stop(self) -> None:
        if not self._started:
            return
        self._started = False
        self._append("stop")

    def add_task(self, description: str, *, total: int | None = None, **fields: object) -> int:
        task_id = self._next_id
        self._next_id += 1
        self._tasks[task_id] = _TaskState(description=description, total=total, completed=0, fields=dict(fields))
        self._append("add", description, total, dict(fields))
        return task_id

    def update(self, task_id: int, *, advance: int | None = None, **fields: object) -> None:
        task = self._tasks[task_id]
        if advance is not None:
            task.completed += advance
        if fields:
            task.fields.update(fields)
        self._append("update", task.completed, dict(task.fields))

    def completed(self, task_id: int) -> int:
        return self._tasks[task_id].completed

    def _append(self, kind: str, *payload: Any) -> None:
        self.records.append(ProgressRecord(kind=kind, payload=payload))


class ProgressRecorder:
    """Factory that tracks progress instances created during a test."""

    def __init__(self) -> None:
        self.instances: list[ProgressProxy] = []

    def factory(self, *args: object, **kwargs: object) -> ProgressProxy:
        proxy = ProgressProxy(*args, **kwargs)
        self.instances.append(proxy)
        return proxy

    def require_single_instance(self) -> ProgressProxy:
        assert self.instances, "progress bar should initialise"
        assert len(self.instances) == 1, "expected a single progress instance"
        return self.instances[0]
