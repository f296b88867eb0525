# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the language server event handlers."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

import pytest
from lsprotocol import types as lsp
from pygls.exceptions import JsonRpcException

from dockerlint.config.loader import SettingsStore
from dockerlint.config.models import SettingsSnapshot
from dockerlint.core.errors import InitializationError
from dockerlint.core.models import Diagnostic, LinterRun, Range
from dockerlint.core.severity import Severity
from dockerlint.server import (
    INITIALIZE_FAILED_CODE,
    DockerLinterServer,
    apply_settings,
    initialize_environment,
    validate_many,
    validate_single,
)
from dockerlint.validation import ValidationResult

SETTINGS = {"docker-linter": {"flake8": {"container": "lint"}}}


@dataclass
class FakeDocument:
    uri: str
    path: str
    source: str


class FakeServer:
    """Record what the handlers publish instead of writing to a client."""

    def __init__(self, *, configured: bool = True, machine: str | None = None) -> None:
        self.machine = machine
        self.store = SettingsStore()
        if configured:
            self.store.replace(SETTINGS)
        self.errors: list[str] = []
        self.published: dict[str, ValidationResult] = {}

    def show_error(self, message: str) -> None:
        self.errors.append(message)

    def publish(self, uri: str, result: ValidationResult) -> None:
        self.published[uri] = result


def _result(message: str) -> ValidationResult:
    diagnostic = Diagnostic(range=Range.whole_line(0), severity=Severity.WARNING, message=message)
    return ValidationResult(run=LinterRun(returncode=1, diagnostics=[diagnostic]), diagnostics=[diagnostic])


def test_validate_single_publishes_result(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[tuple[str, int]] = []

    async def fake_validate(text: str, snapshot: SettingsSnapshot) -> ValidationResult:
        seen.append((text, snapshot.version))
        return _result("checked")

    monkeypatch.setattr("dockerlint.server.validate_document", fake_validate)
    server = FakeServer()

    asyncio.run(validate_single(server, FakeDocument("file:///a.py", "/a.py", "import os\n")))

    assert seen == [("import os\n", 1)]
    assert server.published["file:///a.py"].diagnostics[0].message == "checked"
    assert server.errors == []


def test_validate_single_reports_failures(monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_validate(text: str, snapshot: SettingsSnapshot) -> ValidationResult:
        raise FileNotFoundError("Executable 'docker' was not found on PATH")

    monkeypatch.setattr("dockerlint.server.validate_document", fake_validate)
    server = FakeServer()

    asyncio.run(validate_single(server, FakeDocument("file:///a.py", "/a.py", "")))

    assert server.errors == ["Executable 'docker' was not found on PATH"]
    assert server.published == {}


def test_validate_single_without_settings_is_skipped(monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_validate(text: str, snapshot: SettingsSnapshot) -> ValidationResult:
        raise AssertionError("validation must not run without settings")

    monkeypatch.setattr("dockerlint.server.validate_document", fake_validate)
    server = FakeServer(configured=False)

    asyncio.run(validate_single(server, FakeDocument("file:///a.py", "/a.py", "")))

    assert server.errors == []
    assert server.published == {}


def test_validate_many_deduplicates_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_validate(text: str, snapshot: SettingsSnapshot) -> ValidationResult:
        if text == "ok":
            return _result("fine")
        raise RuntimeError("CLI: docker\nunavailable")

    monkeypatch.setattr("dockerlint.server.validate_document", fake_validate)
    server = FakeServer()
    documents = [
        FakeDocument("file:///a.py", "/a.py", "broken"),
        FakeDocument("file:///b.py", "/b.py", "ok"),
        FakeDocument("file:///c.py", "/c.py", "broken"),
    ]

    asyncio.run(validate_many(server, documents))

    assert list(server.published) == ["file:///b.py"]
    assert server.errors == ["docker unavailable"]


def test_apply_settings_replaces_snapshot() -> None:
    server = FakeServer(configured=False)

    assert apply_settings(server, SETTINGS)
    assert server.store.current is not None
    assert server.store.current.profile == "flake8"


def test_apply_settings_reports_invalid_settings() -> None:
    server = FakeServer()
    previous = server.store.current

    assert not apply_settings(server, {"docker-linter": {"perl": {"container": "a"}, "flake8": {"container": "b"}}})
    assert server.store.current is previous
    assert len(server.errors) == 1
    assert server.errors[0].startswith("docker-linter: multiple linter profiles")


def test_apply_settings_ignores_missing_payload() -> None:
    server = FakeServer(configured=False)

    assert not apply_settings(server, None)
    assert server.errors == []


def test_initialize_environment_skips_without_machine(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_bootstrap(machine: str) -> dict[str, str]:
        raise AssertionError("docker-machine must not be called")

    monkeypatch.setattr("dockerlint.server.bootstrap_machine_env", fake_bootstrap)

    initialize_environment(FakeServer(machine=None))


def test_initialize_environment_failure_carries_retry(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_bootstrap(machine: str) -> dict[str, str]:
        raise InitializationError(f'Host does not exist: "{machine}"')

    monkeypatch.setattr("dockerlint.server.bootstrap_machine_env", fake_bootstrap)

    with pytest.raises(JsonRpcException) as excinfo:
        initialize_environment(FakeServer(machine="dev"))

    assert excinfo.value.code == INITIALIZE_FAILED_CODE
    assert excinfo.value.data == {"retry": True}
    assert excinfo.value.message == 'Host does not exist: "dev"'


def test_server_publish_uses_protocol_channels(monkeypatch: pytest.MonkeyPatch) -> None:
    server = DockerLinterServer(machine=None)
    published: list[lsp.PublishDiagnosticsParams] = []
    shown: list[lsp.ShowMessageParams] = []
    monkeypatch.setattr(server, "text_document_publish_diagnostics", published.append)
    monkeypatch.setattr(server, "window_show_message", shown.append)

    server.publish("file:///a.py", _result("unused import"))
    server.publish(
        "file:///b.py",
        ValidationResult(run=LinterRun(returncode=1), error_message="Error response from daemon"),
    )

    assert len(published) == 1
    assert published[0].uri == "file:///a.py"
    assert published[0].diagnostics[0].message == "unused import"
    assert published[0].diagnostics[0].severity == lsp.DiagnosticSeverity.Warning
    assert [(params.type, params.message) for params in shown] == [
        (lsp.MessageType.Error, "Error response from daemon"),
    ]
