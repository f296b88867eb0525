# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Docker command construction and docker-machine environment bootstrap."""

from __future__ import annotations

import logging
import os
import re
import shlex
from collections.abc import MutableMapping
from typing import Final

from ..config.models import LinterSettings
from ..core.errors import InitializationError
from .process import CommandOptions, SubprocessExecutionError, run_command

LOGGER = logging.getLogger(__name__)

DOCKER_EXECUTABLE: Final[str] = "docker"
DOCKER_MACHINE_EXECUTABLE: Final[str] = "docker-machine"
MACHINE_ENV_PATTERN: Final[re.Pattern[str]] = re.compile(r'export (.+)="(.+)"\n')
MACHINE_ENV_TIMEOUT: Final[float] = 30.0


def build_exec_command(settings: LinterSettings) -> list[str]:
    """Return the ``docker exec`` invocation running the configured linter.

    The linter reads the document from stdin, hence ``-i``.

    Args:
        settings: Active linter settings.

    Returns:
        list[str]: Command argument list.
    """

    return [DOCKER_EXECUTABLE, "exec", "-i", settings.container, *shlex.split(settings.command)]


def parse_machine_env(output: str) -> dict[str, str]:
    """Return the variables exported by ``docker-machine env --shell bash``.

    Args:
        output: Standard output of the ``docker-machine env`` command.

    Returns:
        dict[str, str]: Variable names mapped to their values.
    """

    return {match.group(1): match.group(2) for match in MACHINE_ENV_PATTERN.finditer(output)}


def bootstrap_machine_env(
    machine: str,
    *,
    environ: MutableMapping[str, str] | None = None,
) -> dict[str, str]:
    """Export the Docker client environment of ``machine`` into ``environ``.

    Args:
        machine: docker-machine name, usually ``"default"``.
        environ: Environment to update; defaults to :data:`os.environ`.

    Returns:
        dict[str, str]: Variables applied to ``environ``.

    Raises:
        InitializationError: If docker-machine is missing or reports an error.
    """

    target = os.environ if environ is None else environ
    try:
        completed = run_command(
            [DOCKER_MACHINE_EXECUTABLE, "env", machine, "--shell", "bash"],
            options=CommandOptions(timeout=MACHINE_ENV_TIMEOUT),
        )
    except FileNotFoundError as exc:
        raise InitializationError(str(exc)) from exc
    except SubprocessExecutionError as exc:
        raise InitializationError((exc.stderr or str(exc)).strip()) from exc

    variables = parse_machine_env(completed.stdout)
    target.update(variables)
    LOGGER.info("loaded %d docker-machine variable(s) for %s", len(variables), machine)
    return variables


__all__ = [
    "DOCKER_EXECUTABLE",
    "MACHINE_ENV_PATTERN",
    "bootstrap_machine_env",
    "build_exec_command",
    "parse_machine_env",
]
