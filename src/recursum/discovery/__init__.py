# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Path source strategies feeding the hashing pipeline."""

from __future__ import annotations

from pathlib import Path

from ..config import HashRunConfig, InputMode
from ..errors import SourceError
from .base import PathSource, Sequencer
from .explicit import ExplicitListSource
from .filesystem import DirectoryWalkSource, list_directory
from .stdin import StdinStreamSource

__all__ = [
    "DirectoryWalkSource",
    "ExplicitListSource",
    "PathSource",
    "Sequencer",
    "StdinStreamSource",
    "build_source",
    "list_directory",
]


def build_source(config: HashRunConfig) -> PathSource:
    """Return the path source selected by ``config.mode``.

    Args:
        config: Resolved run configuration.

    Returns:
        PathSource: Strategy ready to feed a dispatch queue.

    Raises:
        SourceError: If a single explicit input is neither a file nor a
            directory, or the directory root does not exist.
    """

    if config.mode is InputMode.STDIN:
        return StdinStreamSource()
    if config.mode is InputMode.DIRECTORY:
        root = config.inputs[0]
        if not Path(root).is_dir():
            raise SourceError(f"not a directory: {root}")
        return DirectoryWalkSource(root, walker_count=config.walker_count)
    if len(config.inputs) == 1 and not Path(config.inputs[0]).is_file():
        raise SourceError(f"input is not a directory, file, or '-' for stdin: {config.inputs[0]}")
    return ExplicitListSource(config.inputs)
