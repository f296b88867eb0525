# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Language server wiring editor events to containerised validation."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any, Final, Protocol

from lsprotocol import types
from pygls.exceptions import JsonRpcException
from pygls.lsp.server import LanguageServer

from . import __version__
from .config.loader import SettingsStore
from .core.errors import ConfigError, InitializationError
from .runtime.container import bootstrap_machine_env
from .validation import ErrorMessageTracker, ValidationResult, format_error_message, validate_document

LOGGER = logging.getLogger(__name__)

SERVER_NAME: Final[str] = "docker-linter"
INITIALIZE_FAILED_CODE: Final[int] = 99


class Document(Protocol):
    """Subset of the pygls text document used for validation."""

    uri: str
    path: str
    source: str


class DockerLinterServer(LanguageServer):
    """Language server holding the active settings snapshot."""

    def __init__(self, *, machine: str | None = "default", strict: bool = True) -> None:
        """Initialise the server.

        Args:
            machine: docker-machine to bootstrap on ``initialize``; ``None`` skips it.
            strict: Validate capture group indices when settings arrive.
        """

        super().__init__(SERVER_NAME, __version__, text_document_sync_kind=types.TextDocumentSyncKind.Full)
        self.machine = machine
        self.store = SettingsStore(strict=strict)

    def show_error(self, message: str) -> None:
        self.window_show_message(types.ShowMessageParams(type=types.MessageType.Error, message=message))

    def publish(self, uri: str, result: ValidationResult) -> None:
        """Send ``result`` to the editor on the channel it belongs to."""

        if not result.publishable:
            self.show_error(result.error_message or "")
            return
        self.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(
                uri=uri,
                diagnostics=[diagnostic.to_lsp() for diagnostic in result.diagnostics],
            ),
        )


async def validate_single(ls: DockerLinterServer, document: Document) -> None:
    """Validate one document, reporting any failure as a single message."""

    snapshot = ls.store.current
    if snapshot is None:
        LOGGER.info("no linter settings yet; skipping %s", document.uri)
        return
    try:
        result = await validate_document(document.source, snapshot)
    except Exception as exc:
        LOGGER.exception("validation failed for %s", document.uri)
        ls.show_error(format_error_message(exc, document.path))
        return
    ls.publish(document.uri, result)


async def validate_many(ls: DockerLinterServer, documents: Iterable[Document]) -> None:
    """Validate ``documents`` concurrently, reporting each distinct failure once."""

    snapshot = ls.store.current
    if snapshot is None:
        LOGGER.info("no linter settings yet; skipping validation")
        return
    pending = list(documents)
    outcomes = await asyncio.gather(
        *(validate_document(document.source, snapshot) for document in pending),
        return_exceptions=True,
    )
    tracker = ErrorMessageTracker()
    for document, outcome in zip(pending, outcomes, strict=True):
        if isinstance(outcome, ValidationResult):
            ls.publish(document.uri, outcome)
        elif isinstance(outcome, Exception):
            LOGGER.error("validation failed for %s: %s", document.uri, outcome)
            tracker.add(format_error_message(outcome, document.path))
        else:
            raise outcome
    tracker.send_errors(ls.show_error)


def open_documents(ls: DockerLinterServer) -> list[Any]:
    return list(ls.workspace.text_documents.values())


def apply_settings(ls: DockerLinterServer, settings: Any) -> bool:
    """Replace the settings snapshot, reporting invalid settings to the user.

    Returns:
        bool: ``True`` when a new snapshot became active.
    """

    if settings is None:
        LOGGER.info("configuration change carried no settings")
        return False
    try:
        ls.store.replace(settings)
    except ConfigError as exc:
        ls.show_error(f"docker-linter: {exc}")
        return False
    return True


def initialize_environment(ls: DockerLinterServer) -> None:
    """Bootstrap the docker-machine environment configured for ``ls``.

    Raises:
        JsonRpcException: If the environment cannot be established; the error
            data carries the ``retry`` hint for the client.
    """

    if ls.machine is None:
        return
    try:
        bootstrap_machine_env(ls.machine)
    except InitializationError as exc:
        raise JsonRpcException(
            message=exc.message,
            code=INITIALIZE_FAILED_CODE,
            data={"retry": exc.retry},
        ) from exc


def register_features(ls: DockerLinterServer) -> DockerLinterServer:
    """Register the protocol handlers on ``ls`` and return it."""

    @ls.feature(types.INITIALIZE)
    def on_initialize(server: DockerLinterServer, params: types.InitializeParams) -> None:
        del params
        initialize_environment(server)

    @ls.feature(types.TEXT_DOCUMENT_DID_OPEN)
    async def on_did_open(server: DockerLinterServer, params: types.DidOpenTextDocumentParams) -> None:
        await validate_single(server, server.workspace.get_text_document(params.text_document.uri))

    @ls.feature(types.TEXT_DOCUMENT_DID_CHANGE)
    async def on_did_change(server: DockerLinterServer, params: types.DidChangeTextDocumentParams) -> None:
        await validate_single(server, server.workspace.get_text_document(params.text_document.uri))

    @ls.feature(types.WORKSPACE_DID_CHANGE_CONFIGURATION)
    async def on_did_change_configuration(
        server: DockerLinterServer,
        params: types.DidChangeConfigurationParams,
    ) -> None:
        if apply_settings(server, params.settings):
            await validate_many(server, open_documents(server))

    @ls.feature(types.WORKSPACE_DID_CHANGE_WATCHED_FILES)
    async def on_did_change_watched_files(
        server: DockerLinterServer,
        params: types.DidChangeWatchedFilesParams,
    ) -> None:
        del params
        await validate_many(server, open_documents(server))

    return ls


def create_server(*, machine: str | None = "default", strict: bool = True) -> DockerLinterServer:
    """Return a fully wired :class:`DockerLinterServer`."""

    return register_features(DockerLinterServer(machine=machine, strict=strict))


__all__ = [
    "DockerLinterServer",
    "INITIALIZE_FAILED_CODE",
    "apply_settings",
    "create_server",
    "initialize_environment",
    "validate_many",
    "validate_single",
]
