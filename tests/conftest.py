# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence

import pytest

from dockerlint.config.models import LinterSettings, SettingsSnapshot

FLAKE8_PATTERN = r"^stdin:(\d+):(\d+): ([A-Z]+\d+) (.*)$"

Chunk = tuple[str, str]


@pytest.fixture
def flake8_settings() -> LinterSettings:
    """Return settings for a flake8 container named ``lint``."""
    return LinterSettings(
        container="lint",
        command="flake8 -",
        regexp=FLAKE8_PATTERN,
        line=1,
        column=2,
        code=3,
        message=4,
    )


@pytest.fixture
def snapshot(flake8_settings: LinterSettings) -> SettingsSnapshot:
    """Return a first-version snapshot wrapping :func:`flake8_settings`."""
    return SettingsSnapshot(version=1, profile="flake8", settings=flake8_settings)


class FakeRunner:
    """Stand-in for ``stream_command`` replaying canned output chunks."""

    def __init__(self, chunks: Sequence[Chunk], returncode: int = 0) -> None:
        self.chunks = list(chunks)
        self.returncode = returncode
        self.calls: list[tuple[list[str], str]] = []

    async def __call__(
        self,
        args: Sequence[str],
        *,
        stdin_text: str,
        on_chunk: Callable[[str, str], None],
        env: Mapping[str, str] | None = None,
    ) -> int:
        del env
        self.calls.append((list(args), stdin_text))
        for stream, chunk in self.chunks:
            on_chunk(stream, chunk)
        return self.returncode


@pytest.fixture
def fake_runner() -> Callable[..., FakeRunner]:
    """Return a factory building :class:`FakeRunner` instances."""
    return FakeRunner
