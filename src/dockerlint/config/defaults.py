# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Built-in linter profiles merged beneath user supplied settings."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Final

SETTINGS_SECTION: Final[str] = "docker-linter"
ACTIVE_KEY: Final[str] = "active"

PERL_PROFILE: Final[str] = "perl"
PERLCRITIC_PROFILE: Final[str] = "perlcritic"
FLAKE8_PROFILE: Final[str] = "flake8"

KNOWN_PROFILES: Final[tuple[str, ...]] = (PERL_PROFILE, PERLCRITIC_PROFILE, FLAKE8_PROFILE)

BUILTIN_PROFILES: Final[Mapping[str, Mapping[str, Any]]] = MappingProxyType(
    {
        # ``perl -c`` reports "<message> at - line <n>, ..." for code read from stdin.
        PERL_PROFILE: {
            "command": "perl -c",
            "regexp": r"^(.*?) at - line (\d+)",
            "line": 2,
            "message": 1,
        },
        # Verbosity 1 is "%f:%l:%c:%m".
        PERLCRITIC_PROFILE: {
            "command": "perlcritic --nocolor --verbose 1 -",
            "regexp": r"^[^:\n]*:(\d+):(\d+):(.*)$",
            "line": 1,
            "column": 2,
            "message": 3,
        },
        FLAKE8_PROFILE: {
            "command": "flake8 -",
            "regexp": r"^stdin:(\d+):(\d+): ([A-Z]+\d+) (.*)$",
            "line": 1,
            "column": 2,
            "code": 3,
            "message": 4,
        },
    },
)

__all__ = [
    "ACTIVE_KEY",
    "BUILTIN_PROFILES",
    "FLAKE8_PROFILE",
    "KNOWN_PROFILES",
    "PERLCRITIC_PROFILE",
    "PERL_PROFILE",
    "SETTINGS_SECTION",
]
