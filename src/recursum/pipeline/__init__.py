# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Dispatch, hashing and ordered collection stages."""

from __future__ import annotations

from .collector import OrderedCollector, ResultSink
from .dispatch import DispatchQueue
from .runner import HashPipeline, ResultObserver, RunSummary
from .workers import HashingWorkerPool, HashPath, WorkerExit, hash_item

__all__ = [
    "DispatchQueue",
    "HashPath",
    "HashPipeline",
    "HashingWorkerPool",
    "OrderedCollector",
    "ResultObserver",
    "ResultSink",
    "RunSummary",
    "WorkerExit",
    "hash_item",
]
