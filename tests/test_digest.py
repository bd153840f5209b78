# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for digest algorithms and file hashing."""

from __future__ import annotations

import hashlib
import io
from pathlib import Path

import pytest

from recursum.digest import FileHasher, HashAlgorithm, build_hasher, hash_stream, truncate_digest


@pytest.mark.parametrize(
    ("algorithm", "payload", "expected"),
    [
        (HashAlgorithm.SHA256, b"abc", "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"),
        (HashAlgorithm.MD5, b"abc", "900150983cd24fb0d6963f7d28e17f72"),
        (HashAlgorithm.BLAKE3, b"", "af1349b9f5f9a1a6a0404dea36dcc9499bcb25c9adc112b7cc9a93cae41f3262"),
        (HashAlgorithm.XXH64, b"", "ef46db3751d8e999"),
    ],
)
def test_known_digests(algorithm: HashAlgorithm, payload: bytes, expected: str) -> None:
    hasher = build_hasher(algorithm)
    hasher.update(payload)

    assert hasher.hexdigest() == expected


def test_every_algorithm_builds_a_hasher() -> None:
    for algorithm in HashAlgorithm:
        hasher = build_hasher(algorithm)
        hasher.update(b"payload")
        assert hasher.hexdigest()


def test_algorithm_accepts_plain_names() -> None:
    assert build_hasher("sha1").hexdigest() == hashlib.sha1().hexdigest()


def test_hash_stream_matches_hashlib_for_any_buffer_size() -> None:
    payload = bytes(range(256)) * 97
    expected = hashlib.blake2b(payload).hexdigest()

    small = hash_stream(io.BytesIO(payload), HashAlgorithm.BLAKE2B, buffer_size=7)
    large = hash_stream(io.BytesIO(payload), HashAlgorithm.BLAKE2B)

    assert small.digest == large.digest == expected
    assert small.size == len(payload)


def test_truncate_digest_keeps_a_prefix() -> None:
    digest = hashlib.sha256(b"abc").hexdigest()

    assert truncate_digest(digest, 10) == digest[:10]
    assert truncate_digest(digest, 1000) == digest
    assert truncate_digest(digest, None) == digest


def test_file_hasher_reads_file_and_truncates(tmp_path: Path) -> None:
    target = tmp_path / "data.bin"
    target.write_bytes(b"abc")

    full = FileHasher(algorithm=HashAlgorithm.SHA256)(str(target))
    short = FileHasher(algorithm=HashAlgorithm.SHA256, digest_length=8)(str(target))

    assert full.digest == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    assert full.size == 3
    assert short.digest == full.digest[:8]


def test_file_hasher_propagates_os_errors(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        FileHasher()(str(tmp_path / "missing"))
