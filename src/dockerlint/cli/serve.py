# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``serve`` command starting the language server on stdio."""

from __future__ import annotations

from typing import Annotated

import typer

from ..logging import configure_logging
from ..server import create_server


def serve_command(
    machine: Annotated[
        str,
        typer.Option("--machine", help="docker-machine whose environment is loaded on initialize."),
    ] = "default",
    no_machine: Annotated[
        bool,
        typer.Option("--no-machine", help="Use the ambient Docker environment without docker-machine."),
    ] = False,
    lenient: Annotated[
        bool,
        typer.Option("--lenient", help="Accept capture group indices the pattern does not define."),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug records to stderr.")] = False,
) -> None:
    """Start the docker-linter language server over stdio."""

    configure_logging(verbose=verbose)
    server = create_server(machine=None if no_machine else machine, strict=not lenient)
    server.start_io()


__all__ = ["serve_command"]
