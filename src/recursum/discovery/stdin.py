# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Path source reading one path per line from a stream."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator
from threading import Event
from typing import BinaryIO, TextIO

from ..errors import SourceError
from .base import PathSource

LOGGER = logging.getLogger(__name__)


def decode_line(raw: bytes | str) -> str:
    """Return ``raw`` without its line terminator as a filesystem path string.

    Bytes are decoded with the filesystem encoding so undecodable names
    survive the round trip back to the filesystem.

    Args:
        raw: Line read from the stream, including its terminator.

    Returns:
        str: Path text, empty for blank lines.
    """

    if isinstance(raw, bytes):
        return os.fsdecode(raw.rstrip(b"\r\n"))
    return raw.rstrip("\r\n")


class StdinStreamSource(PathSource):
    """Yield paths from a line-delimited stream in arrival order.

    Lines are read eagerly into an unbounded queue so an upstream writer,
    such as ``find`` piping into this process, never blocks on a full pipe.
    Blank lines are ignored.
    """

    def __init__(self, stream: BinaryIO | TextIO | None = None) -> None:
        """Create a source over ``stream``.

        Args:
            stream: Stream to read; defaults to the binary buffer of
                ``sys.stdin`` resolved when discovery starts.
        """

        super().__init__()
        self._stream = stream

    @property
    def identifier(self) -> str:
        return "stdin"

    def queue_capacity(self, worker_count: int, factor: float) -> int | None:
        return None

    def discover(self, cancel: Event) -> Iterator[str]:
        stream = self._stream if self._stream is not None else getattr(sys.stdin, "buffer", sys.stdin)
        try:
            for raw in stream:
                if cancel.is_set():
                    return
                path = decode_line(raw)
                if not path:
                    continue
                yield path
        except OSError as exc:
            raise SourceError(f"failed reading paths from stdin: {exc}") from exc
        LOGGER.debug("stdin closed after %d paths", self.produced)


__all__ = ["StdinStreamSource", "decode_line"]
