# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy raised by dockerlint components."""

from __future__ import annotations


class DockerLinterError(Exception):
    """Base class for errors raised by the docker linter bridge."""


class ConfigError(DockerLinterError):
    """Raised when linter settings are missing, ambiguous or invalid."""


class InitializationError(DockerLinterError):
    """Raised when the container environment cannot be established.

    The ``retry`` flag is forwarded to the editor so it may offer to restart
    the server once the environment has been fixed.
    """

    def __init__(self, message: str, *, retry: bool = True) -> None:
        """Initialise the error with the user-facing ``message``.

        Args:
            message: Description of the failure, typically the tool's stderr.
            retry: Whether the client should retry initialisation.
        """

        super().__init__(message)
        self.message = message
        self.retry = retry


__all__ = ["ConfigError", "DockerLinterError", "InitializationError"]
