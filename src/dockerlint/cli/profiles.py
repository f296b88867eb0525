# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``profiles`` command listing the built-in linter profiles."""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.table import Table

from ..config.defaults import BUILTIN_PROFILES

_GROUP_FIELDS = ("line", "column", "severity", "message", "code")


def profiles_command() -> None:
    """List built-in linter profiles and their default patterns."""

    table = Table(title="Built-in profiles", box=box.SIMPLE, expand=True)
    table.add_column("Profile", style="bold")
    table.add_column("Command")
    table.add_column("Pattern", overflow="fold")
    table.add_column("Groups")
    for name, defaults in BUILTIN_PROFILES.items():
        groups = ", ".join(f"{field}={defaults[field]}" for field in _GROUP_FIELDS if field in defaults)
        table.add_row(name, str(defaults["command"]), str(defaults["regexp"]), groups)
    Console().print(table)


__all__ = ["profiles_command"]
