# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Validate documents by streaming them through the containerised linter."""

from __future__ import annotations

import logging
import re
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Final, Protocol

from .config.models import LinterSettings, SettingsSnapshot
from .core.models import Diagnostic, LinterRun, Range
from .core.severity import Severity
from .parsers.extractor import ExtractionConfig, extract
from .runtime.container import build_exec_command
from .runtime.process import ChunkCallback, StreamName, stream_command

LOGGER = logging.getLogger(__name__)

CLI_PREFIX: Final[str] = "CLI: "
UNKNOWN_ERROR_TEMPLATE: Final[str] = "An unknown error occurred while validating file: {path}"
_NEWLINES: Final[re.Pattern[str]] = re.compile(r"\r?\n")


class StreamRunner(Protocol):
    """Callable executing a command while streaming its output."""

    def __call__(
        self,
        args: Sequence[str],
        *,
        stdin_text: str,
        on_chunk: ChunkCallback,
        env: Mapping[str, str] | None = None,
    ) -> Awaitable[int]: ...


class ChunkAccumulator:
    """Collect diagnostics and debug text for one validation run.

    Output arrives in arbitrary chunks on two streams. Each stream is buffered
    whole and extracted once in :meth:`close`, so a diagnostic split across
    chunks (including one matched by a multi-line pattern) is found once.
    Streams are extracted in the order they first produced output.
    """

    def __init__(self, config: ExtractionConfig) -> None:
        self._config = config
        self._streams: dict[StreamName, list[str]] = {}
        self._output: list[str] = []
        self.diagnostics: list[Diagnostic] = []

    @property
    def output(self) -> str:
        """Return every chunk received so far, concatenated in arrival order."""

        return "".join(self._output)

    def feed(self, stream: StreamName, chunk: str) -> None:
        self._output.append(chunk)
        self._streams.setdefault(stream, []).append(chunk)

    def close(self) -> list[Diagnostic]:
        """Extract diagnostics from every buffered stream and return them all."""

        for chunks in self._streams.values():
            self.diagnostics.extend(extract("".join(chunks), self._config))
        self._streams.clear()
        return self.diagnostics


def debug_string(settings: LinterSettings, extra: str) -> str:
    """Return the pipe separated summary attached to every validation."""

    return " | ".join([settings.machine, settings.container, settings.command, settings.regexp, extra])


def debug_diagnostic(message: str) -> Diagnostic:
    """Return an informational diagnostic spanning the whole first line.

    Args:
        message: Debug text to show in the editor.

    Returns:
        Diagnostic: Information-level diagnostic on line ``0``.
    """

    return Diagnostic(range=Range.whole_line(0), severity=Severity.INFORMATION, message=message)


def format_error_message(error: BaseException | str, path: str) -> str:
    """Return a single-line, user-facing message for ``error``.

    Args:
        error: Exception raised during validation, or raw error text.
        path: Filesystem path of the document being validated.

    Returns:
        str: Message with newlines collapsed and any ``"CLI: "`` prefix removed.
    """

    text = error if isinstance(error, str) else str(error)
    if not text:
        return UNKNOWN_ERROR_TEMPLATE.format(path=path)
    text = _NEWLINES.sub(" ", text)
    return text.removeprefix(CLI_PREFIX)


@dataclass(slots=True, frozen=True)
class ValidationResult:
    """Outcome of validating one document.

    Exactly one of ``diagnostics`` (to publish) or ``error_message`` (to show
    to the user) is meaningful: a daemon error suppresses publication.
    """

    run: LinterRun
    diagnostics: list[Diagnostic] = field(default_factory=list)
    error_message: str | None = None

    @property
    def publishable(self) -> bool:
        return self.error_message is None


async def run_linter(
    text: str,
    snapshot: SettingsSnapshot,
    *,
    runner: StreamRunner = stream_command,
    env: Mapping[str, str] | None = None,
) -> LinterRun:
    """Pipe ``text`` into the configured container and parse its output.

    Args:
        text: Document contents.
        snapshot: Settings captured when the validation started.
        runner: Streaming process runner.
        env: Optional environment for the ``docker`` client.

    Returns:
        LinterRun: Exit status, combined output and extracted diagnostics.
    """

    accumulator = ChunkAccumulator(snapshot.extraction)
    command = build_exec_command(snapshot.settings)
    LOGGER.debug("running %s (settings version %d)", command, snapshot.version)
    returncode = await runner(command, stdin_text=text, on_chunk=accumulator.feed, env=env)
    diagnostics = accumulator.close()
    return LinterRun(returncode=returncode, output=accumulator.output, diagnostics=diagnostics)


async def validate_document(
    text: str,
    snapshot: SettingsSnapshot,
    *,
    runner: StreamRunner = stream_command,
    env: Mapping[str, str] | None = None,
) -> ValidationResult:
    """Validate ``text`` and decide how the outcome reaches the user.

    Args:
        text: Document contents.
        snapshot: Settings captured when the validation started.
        runner: Streaming process runner.
        env: Optional environment for the ``docker`` client.

    Returns:
        ValidationResult: Diagnostics to publish, or a daemon error message.
    """

    run = await run_linter(text, snapshot, runner=runner, env=env)
    if run.daemon_error:
        LOGGER.warning("docker daemon rejected the linter invocation")
        return ValidationResult(run=run, error_message=format_error_message(run.output, ""))
    summary = debug_string(snapshot.settings, run.output)
    diagnostics = [*run.diagnostics, debug_diagnostic(f"{run.returncode} | {summary}")]
    return ValidationResult(run=run, diagnostics=diagnostics)


class ErrorMessageTracker:
    """Collect error messages and report each distinct one once."""

    def __init__(self) -> None:
        self._messages: dict[str, None] = {}

    def add(self, message: str) -> None:
        self._messages.setdefault(message, None)

    @property
    def messages(self) -> list[str]:
        """Return the distinct messages in the order they were first added."""

        return list(self._messages)

    def send_errors(self, notify: Callable[[str], None]) -> None:
        """Deliver every distinct message through ``notify``."""

        for message in self._messages:
            notify(message)


__all__ = [
    "ChunkAccumulator",
    "ErrorMessageTracker",
    "StreamRunner",
    "ValidationResult",
    "debug_diagnostic",
    "debug_string",
    "format_error_message",
    "run_linter",
    "validate_document",
]
