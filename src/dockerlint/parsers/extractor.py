# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Regex-driven extraction of diagnostics from raw linter output."""

from __future__ import annotations

import re
from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from ..core.models import Diagnostic, Range
from ..core.severity import severity_from_token
from .base import capture, capture_int, iter_pattern_matches


class ExtractionConfig(BaseModel):
    """Describe how capture groups of ``pattern`` map onto diagnostic fields.

    Optional group indices of ``0`` are treated as unset, mirroring editor
    settings where an unconfigured number defaults to zero.
    """

    model_config = ConfigDict(frozen=True)

    pattern: str
    line_group: int = Field(ge=0)
    message_group: int = Field(ge=0)
    column_group: int | None = Field(default=None, ge=0)
    severity_group: int | None = Field(default=None, ge=0)
    code_group: int | None = Field(default=None, ge=0)
    _compiled: re.Pattern[str] = PrivateAttr()

    @field_validator("column_group", "severity_group", "code_group", mode="after")
    @classmethod
    def _zero_means_unset(cls, value: int | None) -> int | None:
        return value or None

    @model_validator(mode="after")
    def _compile_pattern(self) -> ExtractionConfig:
        """Compile ``pattern`` in multi-line mode once per configuration.

        Returns:
            ExtractionConfig: Configuration with the compiled pattern cached.

        Raises:
            ValueError: If ``pattern`` is not a valid regular expression.
        """

        try:
            self._compiled = re.compile(self.pattern, re.MULTILINE)
        except re.error as exc:
            raise ValueError(f"invalid diagnostic pattern {self.pattern!r}: {exc}") from exc
        return self

    @property
    def compiled(self) -> re.Pattern[str]:
        """Return the compiled multi-line pattern."""

        return self._compiled

    @property
    def group_count(self) -> int:
        """Return the number of capture groups declared by ``pattern``."""

        return self._compiled.groups

    def out_of_range_groups(self) -> dict[str, int]:
        """Return configured group indices that exceed :attr:`group_count`.

        Returns:
            dict[str, int]: Field name to offending index.
        """

        fields = {
            "line_group": self.line_group,
            "message_group": self.message_group,
            "column_group": self.column_group,
            "severity_group": self.severity_group,
            "code_group": self.code_group,
        }
        return {name: index for name, index in fields.items() if index is not None and index > self.group_count}


def iter_matches(text: str, config: ExtractionConfig) -> Iterator[re.Match[str]]:
    """Lazily yield raw pattern matches found in ``text``.

    Args:
        text: Raw linter output.
        config: Extraction configuration supplying the pattern.

    Returns:
        Iterator[re.Match[str]]: Single-pass iterator over matches in input order.
    """

    return iter_pattern_matches(text, config.compiled)


def build_diagnostic(match: re.Match[str], config: ExtractionConfig) -> Diagnostic:
    """Build a :class:`Diagnostic` from one pattern match.

    Args:
        match: Match produced by :func:`iter_matches`.
        config: Group mapping used to read each field.

    Returns:
        Diagnostic: Diagnostic with a zero-based line. The line is ``None`` when
        the captured text is not an integer.
    """

    captured_line = capture_int(match, config.line_group)
    line = captured_line - 1 if captured_line is not None else None

    if config.column_group is not None:
        span = Range.marker(line, capture_int(match, config.column_group))
    else:
        span = Range.whole_line(line)

    return Diagnostic(
        range=span,
        severity=severity_from_token(capture(match, config.severity_group)),
        message=capture(match, config.message_group) or "",
        code=capture(match, config.code_group) if config.code_group is not None else None,
    )


def extract(text: str, config: ExtractionConfig) -> list[Diagnostic]:
    """Return every diagnostic described by ``config`` found in ``text``.

    Diagnostics keep the order in which the linter printed them.

    Args:
        text: Raw stdout or stderr text emitted by the linter.
        config: Pattern and group mapping for the active linter profile.

    Returns:
        list[Diagnostic]: Freshly built diagnostics, one per match.
    """

    return [build_diagnostic(match, config) for match in iter_matches(text, config)]


__all__ = ["ExtractionConfig", "build_diagnostic", "extract", "iter_matches"]
