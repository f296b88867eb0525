# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Settings loading, profile selection and versioned snapshots."""

from __future__ import annotations

import json
import logging
import os
import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from ..core.errors import ConfigError
from .defaults import ACTIVE_KEY, BUILTIN_PROFILES, KNOWN_PROFILES, SETTINGS_SECTION
from .models import LinterSettings, SettingsSnapshot, describe_validation_error

LOGGER = logging.getLogger(__name__)

_ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$\{([^}]+)\}")
# Patterns routinely contain ``$`` and braces; they are never expanded.
_UNEXPANDED_KEYS: Final[frozenset[str]] = frozenset({"regexp"})


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _expand_env(data: Mapping[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    expanded: dict[str, Any] = {}
    for key, value in data.items():
        expanded[key] = value if key in _UNEXPANDED_KEYS else _expand_env_value(value, env)
    return expanded


def _expand_env_value(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _ENV_VAR_PATTERN.sub(lambda match: env.get(match.group(1), match.group(0)), value)
    if isinstance(value, Mapping):
        return _expand_env(value, env)
    if isinstance(value, list):
        return [_expand_env_value(item, env) for item in value]
    return value


def settings_section(payload: Mapping[str, Any] | None) -> Mapping[str, Any]:
    """Return the ``docker-linter`` section of an editor settings payload.

    Payloads that already are the section (no ``docker-linter`` key) are
    returned unchanged.

    Args:
        payload: Settings object received from the editor or a settings file.

    Returns:
        Mapping[str, Any]: The linter settings section.

    Raises:
        ConfigError: If the payload or the section is not a mapping.
    """

    if not isinstance(payload, Mapping):
        raise ConfigError("settings payload must be an object")
    section = payload.get(SETTINGS_SECTION, payload)
    if not isinstance(section, Mapping):
        raise ConfigError(f"'{SETTINGS_SECTION}' settings must be an object")
    return section


def select_profile(section: Mapping[str, Any]) -> str:
    """Return the name of the profile to activate from ``section``.

    An explicit ``active`` entry wins. Otherwise exactly one known profile may
    be present and truthy.

    Args:
        section: The ``docker-linter`` settings section.

    Returns:
        str: Name of the selected profile.

    Raises:
        ConfigError: If the selection is unknown, empty or ambiguous.
    """

    active = section.get(ACTIVE_KEY)
    if active is not None:
        if active not in KNOWN_PROFILES:
            known = ", ".join(KNOWN_PROFILES)
            raise ConfigError(f"unknown active profile '{active}' (expected one of: {known})")
        if not section.get(active):
            raise ConfigError(f"active profile '{active}' has no settings")
        return str(active)

    present = [name for name in KNOWN_PROFILES if section.get(name)]
    if not present:
        known = ", ".join(KNOWN_PROFILES)
        raise ConfigError(f"no linter profile configured (expected one of: {known})")
    if len(present) > 1:
        raise ConfigError(
            f"multiple linter profiles configured ({', '.join(present)}); set '{ACTIVE_KEY}' to choose one",
        )
    return present[0]


def build_settings(profile: str, overrides: Mapping[str, Any], *, strict: bool = True) -> LinterSettings:
    """Merge ``overrides`` over the built-in defaults of ``profile``.

    Args:
        profile: Known profile name.
        overrides: User supplied values for the profile.
        strict: When ``True`` capture group indices are checked against the pattern.

    Returns:
        LinterSettings: Validated settings.

    Raises:
        ConfigError: If the merged settings are invalid.
    """

    if not isinstance(overrides, Mapping):
        raise ConfigError(f"settings for profile '{profile}' must be an object")
    merged = _deep_merge(BUILTIN_PROFILES.get(profile, {}), overrides)
    try:
        settings = LinterSettings.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"profile '{profile}': {describe_validation_error(exc)}") from exc
    if strict:
        try:
            settings.validate_groups()
        except ConfigError as exc:
            raise ConfigError(f"profile '{profile}': {exc}") from exc
    return settings


def resolve_settings(
    payload: Mapping[str, Any] | None,
    *,
    profile: str | None = None,
    strict: bool = True,
) -> tuple[str, LinterSettings]:
    """Resolve the active profile and its settings from ``payload``.

    Args:
        payload: Editor settings payload or bare ``docker-linter`` section.
        profile: Optional profile name overriding the payload's selection.
        strict: Forwarded to :func:`build_settings`.

    Returns:
        tuple[str, LinterSettings]: Profile name and validated settings.
    """

    section = dict(settings_section(payload))
    if profile is not None:
        section[ACTIVE_KEY] = profile
    name = select_profile(section)
    return name, build_settings(name, section[name], strict=strict)


class SettingsStore:
    """Hold the current :class:`SettingsSnapshot` and replace it wholesale.

    Readers capture :attr:`current` once and keep using that snapshot, so a
    concurrent replacement never changes settings mid-validation.
    """

    def __init__(self, *, strict: bool = True) -> None:
        self._strict = strict
        self._snapshot: SettingsSnapshot | None = None

    @property
    def current(self) -> SettingsSnapshot | None:
        """Return the active snapshot, or ``None`` before settings arrive."""

        return self._snapshot

    def replace(self, payload: Mapping[str, Any] | None) -> SettingsSnapshot:
        """Build a new snapshot from ``payload`` and make it current.

        The previous snapshot stays active when ``payload`` is invalid.

        Args:
            payload: Settings payload received from the editor.

        Returns:
            SettingsSnapshot: Newly activated snapshot.

        Raises:
            ConfigError: If the payload cannot be resolved into settings.
        """

        profile, settings = resolve_settings(payload, strict=self._strict)
        version = self._snapshot.version + 1 if self._snapshot is not None else 1
        snapshot = SettingsSnapshot(version=version, profile=profile, settings=settings)
        self._snapshot = snapshot
        LOGGER.info("activated linter profile %s (settings version %d)", profile, version)
        return snapshot


def load_settings_file(path: Path, *, env: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Read a JSON or TOML settings document.

    Args:
        path: Settings file; ``.toml`` files are parsed with :mod:`tomllib`,
            everything else as JSON.
        env: Environment used for ``${VAR}`` expansion; defaults to ``os.environ``.

    Returns:
        dict[str, Any]: Parsed settings with environment references expanded.

    Raises:
        ConfigError: If the file is missing, unreadable or malformed.
    """

    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ConfigError(f"cannot read settings file {path}: {exc.strerror or exc}") from exc
    try:
        if path.suffix == ".toml":
            data: Any = tomllib.loads(raw.decode("utf-8"))
        else:
            data = json.loads(raw)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"invalid settings file {path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigError(f"settings file {path} must contain an object")
    return _expand_env(data, os.environ if env is None else env)


__all__ = [
    "SettingsStore",
    "build_settings",
    "load_settings_file",
    "resolve_settings",
    "select_profile",
    "settings_section",
]
