# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Stream file contents through a digest algorithm."""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Final

from .algorithms import HashAlgorithm, build_hasher

DEFAULT_READ_BUFFER_SIZE: Final[int] = 8 * 1024


@dataclass(frozen=True, slots=True)
class FileDigest:
    """Hex digest and byte count for one hashed file."""

    digest: str
    size: int


def truncate_digest(digest: str, max_length: int | None) -> str:
    """Return at most ``max_length`` leading characters of ``digest``.

    A limit longer than the digest leaves it unchanged; nothing is padded.

    Args:
        digest: Full hex digest.
        max_length: Maximum number of characters to keep, ``None`` for all.

    Returns:
        str: Possibly shortened digest that is always a prefix of ``digest``.
    """

    if max_length is None:
        return digest
    return digest[:max_length]


def hash_stream(
    stream: BinaryIO,
    algorithm: HashAlgorithm | str,
    *,
    buffer_size: int = DEFAULT_READ_BUFFER_SIZE,
) -> FileDigest:
    """Hash everything readable from ``stream``.

    Args:
        stream: Binary stream positioned at the first byte to hash.
        algorithm: Digest algorithm to apply.
        buffer_size: Number of bytes requested per read.

    Returns:
        FileDigest: Full hex digest with the number of bytes consumed.
    """

    hasher = build_hasher(algorithm)
    size = 0
    while chunk := stream.read(buffer_size):
        hasher.update(chunk)
        size += len(chunk)
    return FileDigest(digest=hasher.hexdigest(), size=size)


@dataclass(frozen=True, slots=True)
class FileHasher:
    """Callable that opens a path and returns its (possibly truncated) digest.

    Errors raised by ``open`` or ``read`` propagate as ``OSError`` so the
    caller decides how to record them.
    """

    algorithm: HashAlgorithm = HashAlgorithm.BLAKE2B
    digest_length: int | None = None
    buffer_size: int = DEFAULT_READ_BUFFER_SIZE

    def __call__(self, path: str) -> FileDigest:
        with open(path, "rb") as handle:
            result = hash_stream(handle, self.algorithm, buffer_size=self.buffer_size)
        return FileDigest(digest=truncate_digest(result.digest, self.digest_length), size=result.size)


__all__ = ["DEFAULT_READ_BUFFER_SIZE", "FileDigest", "FileHasher", "hash_stream", "truncate_digest"]
