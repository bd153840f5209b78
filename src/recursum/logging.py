# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour and emoji support.

Messages go to stderr so they never mix with hash records on stdout.
"""

from __future__ import annotations

import logging

from rich.logging import RichHandler
from rich.text import Text

from .console import detect_tty, get_console_manager

PACKAGE_LOGGER_NAME = "recursum"


def emoji(symbol: str, enable: bool) -> str:
    """Select an emoji symbol based on the caller's preference.

    Args:
        symbol: Emoji text to include in the output.
        enable: Flag indicating whether emoji output is desired.

    Returns:
        str: Emoji symbol when enabled, otherwise an empty string.
    """

    return symbol if enable else ""


def _print_line(
    msg: str,
    *,
    style: str | None,
    use_emoji: bool,
    use_color: bool | None = None,
) -> None:
    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console_manager().get(color=color_enabled, emoji=use_emoji)
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    console.print(text)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a warning message."""

    prefix = emoji("⚠️ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="yellow", use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an error message."""

    prefix = emoji("❌ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="red", use_emoji=use_emoji, use_color=use_color)


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Route the package logger to a Rich handler on stderr.

    Args:
        verbose: Emit debug records from the pipeline internals.
        quiet: Only emit errors, suppressing skipped-directory warnings.

    Returns:
        logging.Logger: The configured package logger.
    """

    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
    logger.setLevel(level)
    if not any(getattr(handler, "_recursum_handler", False) for handler in logger.handlers):
        console = get_console_manager().get(color=detect_tty(), emoji=False)
        handler = RichHandler(console=console, show_time=False, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        setattr(handler, "_recursum_handler", True)
        logger.addHandler(handler)
        logger.propagate = False
    return logger


__all__ = ["configure_logging", "emoji", "fail", "warn"]
