# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Process execution helpers for running linters inside containers."""

from __future__ import annotations

from .container import bootstrap_machine_env, build_exec_command, parse_machine_env
from .process import CommandOptions, SubprocessExecutionError, run_command, stream_command

__all__ = [
    "CommandOptions",
    "SubprocessExecutionError",
    "bootstrap_machine_env",
    "build_exec_command",
    "parse_machine_env",
    "run_command",
    "stream_command",
]
