# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loaders for linter profiles."""

from __future__ import annotations

from ..core.errors import ConfigError
from .defaults import BUILTIN_PROFILES, KNOWN_PROFILES, SETTINGS_SECTION
from .loader import (
    SettingsStore,
    build_settings,
    load_settings_file,
    resolve_settings,
    select_profile,
    settings_section,
)
from .models import LinterSettings, SettingsSnapshot

__all__ = [
    "BUILTIN_PROFILES",
    "ConfigError",
    "KNOWN_PROFILES",
    "LinterSettings",
    "SETTINGS_SECTION",
    "SettingsSnapshot",
    "SettingsStore",
    "build_settings",
    "load_settings_file",
    "resolve_settings",
    "select_profile",
    "settings_section",
]
