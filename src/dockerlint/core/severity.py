# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final

from lsprotocol.types import DiagnosticSeverity


class Severity(str, Enum):
    """Severity levels understood by the editor diagnostic channel."""

    ERROR = "error"
    WARNING = "warning"
    INFORMATION = "information"

    def to_lsp(self) -> DiagnosticSeverity:
        """Map the severity onto the Language Server Protocol enumeration.

        Returns:
            DiagnosticSeverity: Protocol severity matching this level.
        """

        return _SEVERITY_TO_LSP[self]


def severity_from_token(token: str | None) -> Severity:
    """Translate a captured severity token into a :class:`Severity`.

    Only the exact tokens ``"warning"`` and ``"info"`` are recognised; anything
    else, including a missing capture, is reported as an error.

    Args:
        token: Text captured by the severity group, or ``None`` when absent.

    Returns:
        Severity: Normalised severity for the diagnostic.
    """

    if token is None:
        return Severity.ERROR
    return _TOKEN_TO_SEVERITY.get(token, Severity.ERROR)


_TOKEN_TO_SEVERITY: Final[dict[str, Severity]] = {
    "warning": Severity.WARNING,
    "info": Severity.INFORMATION,
}

_SEVERITY_TO_LSP: Final[dict[Severity, DiagnosticSeverity]] = {
    Severity.ERROR: DiagnosticSeverity.Error,
    Severity.WARNING: DiagnosticSeverity.Warning,
    Severity.INFORMATION: DiagnosticSeverity.Information,
}

__all__ = ["Severity", "severity_from_token"]
