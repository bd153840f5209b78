# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Registry of supported digest algorithms."""

from __future__ import annotations

import hashlib
from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Final, Protocol, runtime_checkable

import xxhash
from blake3 import blake3


@runtime_checkable
class Hasher(Protocol):
    """Incremental hash object shared by ``hashlib``, ``blake3`` and ``xxhash``."""

    def update(self, data: bytes, /) -> object:
        """Feed ``data`` into the running digest."""

    def hexdigest(self) -> str:
        """Return the digest of all data fed so far as hex text."""


class HashAlgorithm(StrEnum):
    """Enumerate the digest algorithms available to the CLI."""

    BLAKE2B = "blake2b"
    BLAKE2S = "blake2s"
    BLAKE3 = "blake3"
    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA512 = "sha512"
    XXH64 = "xxh64"
    XXH128 = "xxh128"


_FACTORIES: Final[Mapping[HashAlgorithm, Callable[[], Hasher]]] = {
    HashAlgorithm.BLAKE2B: hashlib.blake2b,
    HashAlgorithm.BLAKE2S: hashlib.blake2s,
    HashAlgorithm.BLAKE3: blake3,
    HashAlgorithm.MD5: hashlib.md5,
    HashAlgorithm.SHA1: hashlib.sha1,
    HashAlgorithm.SHA256: hashlib.sha256,
    HashAlgorithm.SHA512: hashlib.sha512,
    HashAlgorithm.XXH64: xxhash.xxh64,
    HashAlgorithm.XXH128: xxhash.xxh3_128,
}


def build_hasher(algorithm: HashAlgorithm | str) -> Hasher:
    """Return a fresh incremental hasher for ``algorithm``.

    Args:
        algorithm: Algorithm identifier or its string value.

    Returns:
        Hasher: New hash object with no data fed into it.

    Raises:
        ValueError: If ``algorithm`` is not a supported identifier.
    """

    return _FACTORIES[HashAlgorithm(algorithm)]()


__all__ = ["HashAlgorithm", "Hasher", "build_hasher"]
