# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``check`` command validating a single file outside of an editor."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Sequence
from pathlib import Path
from typing import Annotated, Final

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from ..config.loader import load_settings_file, resolve_settings
from ..config.models import SettingsSnapshot
from ..core.errors import ConfigError
from ..core.models import END_OF_LINE, Diagnostic
from ..core.severity import Severity
from ..logging import configure_logging, fail, info, ok, warn
from ..validation import validate_document

EXIT_DIAGNOSTICS: Final[int] = 1
EXIT_USAGE: Final[int] = 2

_SEVERITY_STYLES: Final[dict[Severity, str]] = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.INFORMATION: "cyan",
}


def _line_label(diagnostic: Diagnostic) -> str:
    line = diagnostic.range.start.line
    return "?" if line is None else str(line + 1)


def _column_label(diagnostic: Diagnostic) -> str:
    if diagnostic.range.end.character == END_OF_LINE:
        return "-"
    column = diagnostic.range.start.character
    return "?" if column is None else str(column)


def render_table(path: Path, diagnostics: Sequence[Diagnostic], *, console: Console | None = None) -> None:
    """Print ``diagnostics`` for ``path`` as a Rich table on stdout."""

    table = Table(title=str(path), box=box.SIMPLE, expand=True)
    table.add_column("Line", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Severity")
    table.add_column("Code")
    table.add_column("Message", overflow="fold")
    for diagnostic in diagnostics:
        style = _SEVERITY_STYLES[diagnostic.severity]
        table.add_row(
            _line_label(diagnostic),
            _column_label(diagnostic),
            f"[{style}]{diagnostic.severity.value}[/]",
            diagnostic.code or "-",
            diagnostic.message,
        )
    (console or Console()).print(table)


def check_command(
    file: Annotated[Path, typer.Argument(metavar="FILE", help="File to lint.")],
    settings: Annotated[
        Path,
        typer.Option("--settings", "-s", help="JSON or TOML settings containing a 'docker-linter' section."),
    ],
    profile: Annotated[
        str | None,
        typer.Option("--profile", "-p", help="Profile to use when several are configured."),
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print diagnostics as JSON.")] = False,
    emoji: Annotated[bool, typer.Option("--emoji/--no-emoji", help="Toggle emoji in status lines.")] = True,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug records to stderr.")] = False,
) -> None:
    """Lint FILE inside the configured container and print its diagnostics."""

    configure_logging(verbose=verbose)
    try:
        profile_name, linter = resolve_settings(load_settings_file(settings), profile=profile)
    except ConfigError as exc:
        fail(str(exc), use_emoji=emoji)
        raise typer.Exit(code=EXIT_USAGE) from exc

    try:
        text = file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        fail(f"cannot read {file}: {exc}", use_emoji=emoji)
        raise typer.Exit(code=EXIT_USAGE) from exc

    snapshot = SettingsSnapshot(version=1, profile=profile_name, settings=linter)
    try:
        result = asyncio.run(validate_document(text, snapshot))
    except OSError as exc:
        fail(str(exc), use_emoji=emoji)
        raise typer.Exit(code=EXIT_USAGE) from exc

    if result.error_message is not None:
        fail(result.error_message, use_emoji=emoji)
        raise typer.Exit(code=EXIT_DIAGNOSTICS)

    diagnostics = result.run.diagnostics
    if as_json:
        typer.echo(json.dumps([diagnostic.model_dump(mode="json") for diagnostic in diagnostics], indent=2))
    elif diagnostics:
        render_table(file, diagnostics)

    unplaced = sum(1 for diagnostic in diagnostics if not diagnostic.has_valid_line)
    if unplaced:
        warn(f"{unplaced} diagnostic(s) had no numeric line and are shown on line 1", use_emoji=emoji)
    info(f"{profile_name} exited with status {result.run.returncode}", use_emoji=emoji)
    if result.run.has_errors():
        raise typer.Exit(code=EXIT_DIAGNOSTICS)
    ok(f"{len(diagnostics)} diagnostic(s), no errors", use_emoji=emoji)


__all__ = ["check_command", "render_table"]
