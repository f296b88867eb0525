# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the dockerlint package."""

from __future__ import annotations

import re
from typing import Final

from lsprotocol import types as lsp
from pydantic import BaseModel, ConfigDict, Field

from .severity import Severity

# Largest LSP ``uinteger``; used as the "rest of line" end character.
END_OF_LINE: Final[int] = 2**31 - 1
DIAGNOSTIC_SOURCE: Final[str] = "docker-linter"
DAEMON_ERROR_PATTERN: Final[re.Pattern[str]] = re.compile(r"^Error response from daemon")


def _unsigned(value: int | None) -> int:
    return value if value is not None and value >= 0 else 0


class Position(BaseModel):
    """Zero-based location inside a document.

    ``None`` marks a value the linter output could not supply as an integer.
    """

    model_config = ConfigDict(frozen=True)

    line: int | None
    character: int | None

    def to_lsp(self) -> lsp.Position:
        """Return the protocol position, clamping invalid values to ``0``.

        Returns:
            lsp.Position: Position accepted by the editor.
        """

        return lsp.Position(line=_unsigned(self.line), character=_unsigned(self.character))


class Range(BaseModel):
    """Start and end positions of a diagnostic."""

    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position

    @classmethod
    def whole_line(cls, line: int | None) -> Range:
        """Return a range covering the entire ``line``.

        Args:
            line: Zero-based line number, or ``None`` when invalid.

        Returns:
            Range: Span from character ``0`` to :data:`END_OF_LINE`.
        """

        return cls(start=Position(line=line, character=0), end=Position(line=line, character=END_OF_LINE))

    @classmethod
    def marker(cls, line: int | None, character: int | None) -> Range:
        """Return a zero-width range at ``character`` on ``line``."""

        position = Position(line=line, character=character)
        return cls(start=position, end=position)

    def to_lsp(self) -> lsp.Range:
        return lsp.Range(start=self.start.to_lsp(), end=self.end.to_lsp())


class Diagnostic(BaseModel):
    """Problem report extracted from linter output."""

    model_config = ConfigDict(frozen=True)

    range: Range
    severity: Severity
    message: str
    code: str | None = None

    @property
    def has_valid_line(self) -> bool:
        """Return whether the captured line number parsed as an integer."""

        return self.range.start.line is not None

    def to_lsp(self) -> lsp.Diagnostic:
        """Convert the record into an ``lsprotocol`` diagnostic.

        Returns:
            lsp.Diagnostic: Diagnostic ready for ``textDocument/publishDiagnostics``.
        """

        return lsp.Diagnostic(
            range=self.range.to_lsp(),
            severity=self.severity.to_lsp(),
            message=self.message,
            code=self.code,
            source=DIAGNOSTIC_SOURCE,
        )


class LinterRun(BaseModel):
    """Capture the outcome of a single containerised linter invocation."""

    model_config = ConfigDict(validate_assignment=True)

    returncode: int
    output: str = ""
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    @property
    def daemon_error(self) -> bool:
        """Return whether the Docker daemon rejected the invocation.

        Returns:
            bool: ``True`` when the combined output starts with the daemon error prefix.
        """

        return DAEMON_ERROR_PATTERN.match(self.output) is not None

    def has_errors(self) -> bool:
        """Return whether any diagnostic carries :attr:`Severity.ERROR`."""

        return any(diagnostic.severity is Severity.ERROR for diagnostic in self.diagnostics)


__all__ = [
    "DAEMON_ERROR_PATTERN",
    "DIAGNOSTIC_SOURCE",
    "END_OF_LINE",
    "Diagnostic",
    "LinterRun",
    "Position",
    "Range",
]
