# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Option declarations and parsed options for the hashing command."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Annotated

import typer

from ..config import DEFAULT_BUFFER_FACTOR, HashRunConfig, detect_mode, resolve_separator
from ..digest import HashAlgorithm

INPUTS_ARGUMENT = Annotated[
    list[str],
    typer.Argument(
        help=(
            "One or more file names, one directory name (every file below it is hashed in "
            "depth-first order), or '-' to read file names from stdin (order is preserved)."
        ),
        metavar="INPUT...",
        show_default=False,
    ),
]
WALKERS_OPTION = Annotated[
    int | None,
    typer.Option("--walkers", "-w", min=1, help="Directory-walking threads, if INPUT is a directory."),
]
THREADS_OPTION = Annotated[
    int | None,
    typer.Option("--threads", "-t", min=1, help="Hashing threads. Defaults to the number of CPUs."),
]
BUFFER_FACTOR_OPTION = Annotated[
    float,
    typer.Option(
        "--buffer-factor",
        "-b",
        help="Paths queued per hashing thread while walking a directory.",
    ),
]
DIGEST_LENGTH_OPTION = Annotated[
    int | None,
    typer.Option("--digest-length", "-d", min=1, help="Maximum length of output hash digests."),
]
ALGORITHM_OPTION = Annotated[
    HashAlgorithm,
    typer.Option("--algorithm", "-a", case_sensitive=False, help="Digest algorithm."),
]
SEPARATOR_OPTION = Annotated[
    str | None,
    typer.Option(
        "--separator",
        "-s",
        help=(
            "Separator. Defaults to tab unless --compatible is given. Use '\\t' for tab and "
            "'\\0' for null (cannot be mixed with other characters)."
        ),
    ),
]
COMPATIBLE_OPTION = Annotated[
    bool,
    typer.Option(
        "--compatible",
        "-c",
        help="Print the hash first and default the separator to two spaces, like md5sum.",
    ),
]
QUIET_OPTION = Annotated[
    bool,
    typer.Option("--quiet", "-q", help="Do not show progress information."),
]
VERBOSE_OPTION = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Log pipeline diagnostics to stderr."),
]


@dataclass(slots=True)
class HashCLIOptions:
    """Capture CLI values supplied to the hashing command."""

    inputs: tuple[str, ...]
    walkers: int | None
    threads: int | None
    buffer_factor: float
    digest_length: int | None
    algorithm: HashAlgorithm
    separator: str | None
    compatible: bool
    quiet: bool
    verbose: bool

    def to_config(self) -> HashRunConfig:
        """Resolve the options into a validated :class:`HashRunConfig`.

        Returns:
            HashRunConfig: Configuration consumed by the pipeline.

        Raises:
            ConfigError: If the inputs cannot be combined or a value is invalid.
        """

        values: dict[str, object] = {
            "mode": detect_mode(self.inputs),
            "inputs": self.inputs,
            "queue_capacity_factor": self.buffer_factor,
            "digest_max_length": self.digest_length,
            "separator": resolve_separator(self.separator, compatible=self.compatible),
            "hash_first": self.compatible,
            "quiet": self.quiet,
            "algorithm": self.algorithm,
        }
        if self.threads is not None:
            values["worker_count"] = self.threads
        if self.walkers is not None:
            values["walker_count"] = self.walkers
        return HashRunConfig.build(**values)


def normalize_inputs(values: Sequence[str] | None) -> tuple[str, ...]:
    """Return positional inputs with empty entries removed, preserving order."""

    if not values:
        return ()
    return tuple(entry for entry in values if entry)


def build_hash_options(
    inputs: Sequence[str] | None,
    *,
    walkers: int | None = None,
    threads: int | None = None,
    buffer_factor: float = DEFAULT_BUFFER_FACTOR,
    digest_length: int | None = None,
    algorithm: HashAlgorithm = HashAlgorithm.BLAKE2B,
    separator: str | None = None,
    compatible: bool = False,
    quiet: bool = False,
    verbose: bool = False,
) -> HashCLIOptions:
    """Construct ``HashCLIOptions`` from Typer callback parameters."""

    return HashCLIOptions(
        inputs=normalize_inputs(inputs),
        walkers=walkers,
        threads=threads,
        buffer_factor=buffer_factor,
        digest_length=digest_length,
        algorithm=algorithm,
        separator=separator,
        compatible=compatible,
        quiet=quiet,
        verbose=verbose,
    )


__all__ = [
    "ALGORITHM_OPTION",
    "BUFFER_FACTOR_OPTION",
    "COMPATIBLE_OPTION",
    "DIGEST_LENGTH_OPTION",
    "INPUTS_ARGUMENT",
    "QUIET_OPTION",
    "SEPARATOR_OPTION",
    "THREADS_OPTION",
    "VERBOSE_OPTION",
    "WALKERS_OPTION",
    "HashCLIOptions",
    "build_hash_options",
    "normalize_inputs",
]
