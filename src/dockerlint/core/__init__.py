# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data types shared across the dockerlint package."""

from __future__ import annotations

from .errors import ConfigError, DockerLinterError, InitializationError
from .models import END_OF_LINE, Diagnostic, LinterRun, Position, Range
from .severity import Severity, severity_from_token

__all__ = [
    "ConfigError",
    "Diagnostic",
    "DockerLinterError",
    "END_OF_LINE",
    "InitializationError",
    "LinterRun",
    "Position",
    "Range",
    "Severity",
    "severity_from_token",
]
