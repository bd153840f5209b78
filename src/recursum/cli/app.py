# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point."""

from __future__ import annotations

import typer

from ..config import DEFAULT_BUFFER_FACTOR
from ..digest import HashAlgorithm
from ..errors import ConfigError
from ..logging import configure_logging
from ._hash_cli_models import (
    ALGORITHM_OPTION,
    BUFFER_FACTOR_OPTION,
    COMPATIBLE_OPTION,
    DIGEST_LENGTH_OPTION,
    INPUTS_ARGUMENT,
    QUIET_OPTION,
    SEPARATOR_OPTION,
    THREADS_OPTION,
    VERBOSE_OPTION,
    WALKERS_OPTION,
    build_hash_options,
)
from ._hash_cli_services import run_hash_job
from .shared import EXIT_USAGE, build_cli_logger

app = typer.Typer(
    name="recursum",
    help="Hash lots of files fast, in parallel.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.command()
def hash_files(
    inputs: INPUTS_ARGUMENT,
    walkers: WALKERS_OPTION = None,
    threads: THREADS_OPTION = None,
    buffer_factor: BUFFER_FACTOR_OPTION = DEFAULT_BUFFER_FACTOR,
    digest_length: DIGEST_LENGTH_OPTION = None,
    algorithm: ALGORITHM_OPTION = HashAlgorithm.BLAKE2B,
    separator: SEPARATOR_OPTION = None,
    compatible: COMPATIBLE_OPTION = False,
    quiet: QUIET_OPTION = False,
    verbose: VERBOSE_OPTION = False,
) -> None:
    """Hash files and print one ``path<TAB>digest`` line per file, in input order."""

    options = build_hash_options(
        inputs,
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
    configure_logging(verbose=options.verbose, quiet=options.quiet)
    logger = build_cli_logger(emoji=False)
    try:
        config = options.to_config()
    except ConfigError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=EXIT_USAGE) from exc
    raise typer.Exit(code=run_hash_job(config, logger=logger))


def main() -> None:
    """Run the Typer application as a console script."""

    app()


__all__ = ["app", "hash_files", "main"]
