# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Settings models describing how a linter is run and parsed."""

from __future__ import annotations

from typing import Final

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError, model_validator

from ..core.errors import ConfigError
from ..parsers.extractor import ExtractionConfig

_VALUE_ERROR_PREFIX: Final[str] = "Value error, "


class LinterSettings(BaseModel):
    """Settings for one linter profile as supplied by the editor.

    Group indices follow the editor convention where ``0`` means "not
    configured" for the optional ``column``, ``severity`` and ``code`` fields.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    machine: str = "default"
    container: str = Field(min_length=1)
    command: str = Field(min_length=1)
    regexp: str = Field(min_length=1)
    line: int = Field(ge=0)
    message: int = Field(ge=0)
    column: int = Field(default=0, ge=0)
    severity: int = Field(default=0, ge=0)
    code: int = Field(default=0, ge=0)
    _extraction: ExtractionConfig = PrivateAttr()

    @model_validator(mode="after")
    def _build_extraction(self) -> LinterSettings:
        """Compile ``regexp`` into the extraction configuration once.

        Raises:
            ValueError: If ``regexp`` is not a valid regular expression.
        """

        try:
            self._extraction = ExtractionConfig(
                pattern=self.regexp,
                line_group=self.line,
                message_group=self.message,
                column_group=self.column,
                severity_group=self.severity,
                code_group=self.code,
            )
        except ValidationError as exc:
            raise ValueError(describe_validation_error(exc)) from exc
        return self

    @property
    def extraction(self) -> ExtractionConfig:
        """Return the extraction configuration built when the settings were validated."""

        return self._extraction

    def validate_groups(self) -> ExtractionConfig:
        """Fail fast when any configured group index is not defined by ``regexp``.

        Returns:
            ExtractionConfig: Validated extraction configuration.

        Raises:
            ConfigError: If an index is out of range.
        """

        extraction = self.extraction
        missing = extraction.out_of_range_groups()
        if missing:
            details = ", ".join(f"{name}={index}" for name, index in sorted(missing.items()))
            raise ConfigError(
                f"regexp defines {extraction.group_count} capture group(s) but settings reference {details}",
            )
        return extraction


class SettingsSnapshot(BaseModel):
    """Immutable, versioned view of the active linter settings."""

    model_config = ConfigDict(frozen=True)

    version: int = Field(ge=0)
    profile: str
    settings: LinterSettings

    @property
    def extraction(self) -> ExtractionConfig:
        return self.settings.extraction


def describe_validation_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = str(first.get("msg", exc)).removeprefix(_VALUE_ERROR_PREFIX)
    return f"{location}: {message}" if location else message


__all__ = ["LinterSettings", "SettingsSnapshot", "describe_validation_error"]
