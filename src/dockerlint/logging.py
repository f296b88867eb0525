# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour and emoji support.

Everything renders on standard error: when the language server runs over
stdio, standard output carries the protocol stream.
"""

from __future__ import annotations

import logging
import sys
from functools import lru_cache

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text


def detect_tty() -> bool:
    """Return ``True`` when stderr appears to be backed by a terminal."""

    try:
        return sys.stderr.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=4)
def get_console(*, color: bool = True, emoji: bool = True) -> Console:
    """Return a cached stderr console configured for ``color`` and ``emoji``.

    Args:
        color: ``True`` when ANSI colour output should be enabled.
        emoji: ``True`` when Rich should render emoji glyphs.

    Returns:
        Console: Console writing to standard error.
    """

    tty = detect_tty()
    return Console(
        stderr=True,
        color_system="auto" if color and tty else None,
        no_color=not (color and tty),
        emoji=emoji,
        soft_wrap=True,
    )


def _print_line(msg: str, *, prefix: str, style: str, use_emoji: bool) -> None:
    console = get_console(emoji=use_emoji)
    text = Text(f"{prefix if use_emoji else ''}{msg}")
    text.stylize(style)
    console.print(text)


def info(msg: str, *, use_emoji: bool = True) -> None:
    """Emit an informational message."""

    _print_line(msg, prefix="ℹ️ ", style="cyan", use_emoji=use_emoji)


def ok(msg: str, *, use_emoji: bool = True) -> None:
    """Emit a success message."""

    _print_line(msg, prefix="✅ ", style="green", use_emoji=use_emoji)


def warn(msg: str, *, use_emoji: bool = True) -> None:
    """Emit a warning message."""

    _print_line(msg, prefix="⚠️ ", style="yellow", use_emoji=use_emoji)


def fail(msg: str, *, use_emoji: bool = True) -> None:
    """Emit an error message."""

    _print_line(msg, prefix="❌ ", style="red", use_emoji=use_emoji)


def configure_logging(*, verbose: bool = False) -> None:
    """Route ``dockerlint`` log records to a Rich handler on stderr.

    Args:
        verbose: Emit ``DEBUG`` records when ``True``; otherwise ``INFO``.
    """

    logger = logging.getLogger("dockerlint")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    logger.addHandler(RichHandler(console=get_console(), show_path=False, rich_tracebacks=True))
    logger.propagate = False


__all__ = ["configure_logging", "detect_tty", "fail", "get_console", "info", "ok", "warn"]
