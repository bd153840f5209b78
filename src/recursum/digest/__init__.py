# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Digest algorithms and streaming file hashers."""

from __future__ import annotations

from .algorithms import HashAlgorithm, Hasher, build_hasher
from .files import DEFAULT_READ_BUFFER_SIZE, FileDigest, FileHasher, hash_stream, truncate_digest

__all__ = [
    "DEFAULT_READ_BUFFER_SIZE",
    "FileDigest",
    "FileHasher",
    "HashAlgorithm",
    "Hasher",
    "build_hasher",
    "hash_stream",
    "truncate_digest",
]
