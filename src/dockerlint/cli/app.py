# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

from .check import check_command
from .profiles import profiles_command
from .serve import serve_command
from .typer_ext import create_typer

app = create_typer(help="Run linters inside Docker containers and report editor diagnostics.", no_args_is_help=True)
app.command("serve")(serve_command)
app.command("check")(check_command)
app.command("profiles")(profiles_command)

__all__ = ["app"]
