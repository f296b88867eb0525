# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for diagnostic models and severity helpers."""

from __future__ import annotations

from lsprotocol import types as lsp

from dockerlint.core.models import DIAGNOSTIC_SOURCE, END_OF_LINE, Diagnostic, LinterRun, Range
from dockerlint.core.severity import Severity, severity_from_token


def test_severity_from_token() -> None:
    assert severity_from_token("warning") is Severity.WARNING
    assert severity_from_token("info") is Severity.INFORMATION
    assert severity_from_token("error") is Severity.ERROR
    assert severity_from_token("style") is Severity.ERROR
    assert severity_from_token(None) is Severity.ERROR


def test_severity_maps_to_protocol_levels() -> None:
    assert Severity.ERROR.to_lsp() == lsp.DiagnosticSeverity.Error
    assert Severity.WARNING.to_lsp() == lsp.DiagnosticSeverity.Warning
    assert Severity.INFORMATION.to_lsp() == lsp.DiagnosticSeverity.Information


def test_end_of_line_fits_protocol_uinteger() -> None:
    assert END_OF_LINE == 2**31 - 1


def test_diagnostic_to_lsp() -> None:
    diag = Diagnostic(range=Range.marker(4, 2), severity=Severity.WARNING, message="shadowed", code="W0621")

    converted = diag.to_lsp()

    assert converted.range.start == lsp.Position(line=4, character=2)
    assert converted.range.end == lsp.Position(line=4, character=2)
    assert converted.severity == lsp.DiagnosticSeverity.Warning
    assert converted.code == "W0621"
    assert converted.source == DIAGNOSTIC_SOURCE


def test_whole_line_diagnostic_to_lsp() -> None:
    diag = Diagnostic(range=Range.whole_line(3), severity=Severity.ERROR, message="syntax error")

    converted = diag.to_lsp()

    assert converted.range.start.character == 0
    assert converted.range.end.character == END_OF_LINE
    assert converted.code is None


def test_invalid_line_is_published_on_first_line() -> None:
    diag = Diagnostic(range=Range.marker(None, None), severity=Severity.ERROR, message="bad capture")

    converted = diag.to_lsp()

    assert not diag.has_valid_line
    assert converted.range.start == lsp.Position(line=0, character=0)


def test_linter_run_detects_daemon_errors() -> None:
    rejected = LinterRun(returncode=1, output="Error response from daemon: No such container: lint\n")
    later = LinterRun(returncode=1, output="warning\nError response from daemon: gone\n")

    assert rejected.daemon_error
    assert not later.daemon_error


def test_linter_run_has_errors() -> None:
    warning = Diagnostic(range=Range.whole_line(0), severity=Severity.WARNING, message="w")
    error = Diagnostic(range=Range.whole_line(1), severity=Severity.ERROR, message="e")

    assert not LinterRun(returncode=0, diagnostics=[warning]).has_errors()
    assert LinterRun(returncode=1, diagnostics=[warning, error]).has_errors()


def test_line_zero_is_clamped_to_first_line() -> None:
    diag = Diagnostic(range=Range.marker(-1, 4), severity=Severity.WARNING, message="line 0 reported")

    converted = diag.to_lsp()

    assert converted.range.start == lsp.Position(line=0, character=4)
