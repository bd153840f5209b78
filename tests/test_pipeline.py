# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""End-to-end tests for the hashing pipeline."""

from __future__ import annotations

import io
import random
from collections.abc import Callable, Iterator, Mapping
from pathlib import Path
from threading import Event

import pytest

from recursum.digest import FileDigest, FileHasher
from recursum.discovery import DirectoryWalkSource, ExplicitListSource, StdinStreamSource
from recursum.discovery.base import PathSource
from recursum.errors import SourceError
from recursum.models import FileError, ResultItem
from recursum.pipeline import HashPipeline
from recursum.reporting import OutputSink

TreeFactory = Callable[[Mapping[str, str]], Path]


def _run(source: PathSource, hash_path: Callable[[str], FileDigest], *, workers: int, factor: float = 3.0):
    collected: list[ResultItem] = []
    pipeline = HashPipeline(source, hash_path, collected.append, worker_count=workers, buffer_factor=factor)
    summary = pipeline.run()
    return collected, summary, pipeline


def _digest(path: Path) -> str:
    return FileHasher()(str(path)).digest


def test_directory_walk_emits_depth_first_records(make_tree: TreeFactory) -> None:
    root = make_tree({"a.txt": "alpha", "sub/b.txt": "beta"})
    stream = io.BytesIO()
    pipeline = HashPipeline(
        DirectoryWalkSource(str(root)),
        FileHasher(),
        OutputSink(stream),
        worker_count=4,
        buffer_factor=3.0,
    )

    summary = pipeline.run()

    lines = stream.getvalue().decode().splitlines()
    assert lines == [
        f"{root / 'a.txt'}\t{_digest(root / 'a.txt')}",
        f"{root / 'sub' / 'b.txt'}\t{_digest(root / 'sub' / 'b.txt')}",
    ]
    assert summary.files == 2
    assert summary.bytes == len("alpha") + len("beta")
    assert not summary.cancelled


def test_slow_file_does_not_reorder_output(tmp_path: Path, recording_hasher: Callable[..., object]) -> None:
    paths = []
    for name in ("x", "y", "z"):
        target = tmp_path / name
        target.write_text(name, encoding="utf-8")
        paths.append(str(target))
    hasher = recording_hasher({paths[1]: 0.3})

    collected, _summary, _pipeline = _run(ExplicitListSource(paths), hasher, workers=3)

    assert [item.path for item in collected] == paths
    assert hasher.completed[-1] == paths[1]


def test_stdin_stream_marks_unreadable_file_in_place(tmp_path: Path) -> None:
    (tmp_path / "a").write_text("a", encoding="utf-8")
    (tmp_path / "c").write_text("c", encoding="utf-8")
    listing = "".join(f"{tmp_path / name}\n" for name in ("a", "b", "c")).encode()

    collected, summary, pipeline = _run(StdinStreamSource(io.BytesIO(listing)), FileHasher(), workers=1)

    assert [Path(item.path).name for item in collected] == ["a", "b", "c"]
    assert collected[0].outcome == _digest(tmp_path / "a")
    assert isinstance(collected[1].outcome, FileError)
    assert collected[2].outcome == _digest(tmp_path / "c")
    assert summary.errors == 1
    assert pipeline.queue.capacity is None


def test_single_worker_matches_many_workers(make_tree: TreeFactory) -> None:
    files = {f"d{index % 7}/f{index:03d}.txt": f"content {index}" for index in range(120)}
    root = make_tree(files)

    sequential, _, _ = _run(DirectoryWalkSource(str(root)), FileHasher(), workers=1)
    parallel, _, _ = _run(DirectoryWalkSource(str(root), walker_count=4), FileHasher(), workers=8)

    assert [(item.path, item.outcome) for item in parallel] == [(item.path, item.outcome) for item in sequential]
    assert len(sequential) == len(files)


def test_random_hash_latency_keeps_indices_dense(
    make_tree: TreeFactory,
    recording_hasher: Callable[..., object],
) -> None:
    files = {f"f{index:03d}": str(index) for index in range(60)}
    root = make_tree(files)
    rng = random.Random(11)
    delays = {str(root / name): rng.uniform(0, 0.01) for name in files}

    collected, summary, _ = _run(DirectoryWalkSource(str(root)), recording_hasher(delays), workers=6)

    assert [item.sequence_index for item in collected] == list(range(60))
    assert [Path(item.path).name for item in collected] == sorted(files)
    assert summary.files == 60


def test_directory_walk_queue_respects_capacity(
    make_tree: TreeFactory,
    recording_hasher: Callable[..., object],
) -> None:
    root = make_tree({f"f{index:03d}": "x" for index in range(40)})

    collected, _, pipeline = _run(
        DirectoryWalkSource(str(root)),
        recording_hasher(default_delay=0.005),
        workers=2,
        factor=2.0,
    )

    assert len(collected) == 40
    assert pipeline.queue.capacity == 4
    assert 1 <= pipeline.queue.high_water_mark <= 4


class _FailingSource(PathSource):
    def __init__(self, paths: list[str]) -> None:
        super().__init__()
        self.paths = paths

    @property
    def identifier(self) -> str:
        return "failing"

    def queue_capacity(self, worker_count: int, factor: float) -> int | None:
        return None

    def discover(self, cancel: Event) -> Iterator[str]:
        yield from self.paths
        raise SourceError("listing went away")


def test_source_failure_cancels_run_and_keeps_ordered_prefix(tmp_path: Path) -> None:
    paths = []
    for index in range(3):
        target = tmp_path / f"f{index}"
        target.write_text("x", encoding="utf-8")
        paths.append(str(target))
    collected: list[ResultItem] = []
    pipeline = HashPipeline(_FailingSource(paths), FileHasher(), collected.append, worker_count=2, buffer_factor=3.0)

    with pytest.raises(SourceError, match="listing went away"):
        pipeline.run()

    assert [item.sequence_index for item in collected] == list(range(len(collected)))
    assert pipeline.summary.cancelled
    assert pipeline.summary.unprocessed == 3 - len(collected)


def test_worker_crash_propagates(tmp_path: Path) -> None:
    paths = [str(tmp_path / f"f{index}") for index in range(5)]

    def explode(path: str) -> FileDigest:
        raise RuntimeError(f"hasher bug on {path}")

    pipeline = HashPipeline(ExplicitListSource(paths), explode, lambda _result: None, worker_count=2, buffer_factor=1.0)

    with pytest.raises(RuntimeError, match="hasher bug"):
        pipeline.run()
    assert pipeline.summary.cancelled


def test_interrupt_stops_output_and_reports_unprocessed(make_tree: TreeFactory) -> None:
    root = make_tree({f"f{index:02d}": "x" for index in range(20)})
    collected: list[ResultItem] = []

    def sink(result: ResultItem) -> None:
        if result.sequence_index == 2:
            raise KeyboardInterrupt
        collected.append(result)

    pipeline = HashPipeline(DirectoryWalkSource(str(root)), FileHasher(), sink, worker_count=2, buffer_factor=1.0)

    with pytest.raises(KeyboardInterrupt):
        pipeline.run()

    assert [item.sequence_index for item in collected] == [0, 1]
    assert pipeline.summary.cancelled
    assert pipeline.summary.files == 2
    assert pipeline.summary.unprocessed == pipeline.source.produced - 2


def test_empty_directory_produces_nothing(tmp_path: Path) -> None:
    collected, summary, _ = _run(DirectoryWalkSource(str(tmp_path)), FileHasher(), workers=3)

    assert collected == []
    assert summary.files == 0


def test_directory_walk_counts_only_regular_files(make_tree: TreeFactory) -> None:
    root = make_tree({"a.txt": "a", "sub/b.txt": "b"})
    try:
        (root / "file-link").symlink_to(root / "a.txt")
        (root / "dir-link").symlink_to(root / "sub", target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks are not supported here")

    collected, summary, _ = _run(DirectoryWalkSource(str(root), walker_count=2), FileHasher(), workers=2)

    assert [Path(item.path).relative_to(root).as_posix() for item in collected] == ["a.txt", "sub/b.txt"]
    assert summary.files == 2
