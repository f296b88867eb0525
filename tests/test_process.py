# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for subprocess helpers."""

from __future__ import annotations

import asyncio
import sys

import pytest

from dockerlint.runtime.process import (
    CommandOptions,
    SubprocessExecutionError,
    normalize_args,
    run_command,
    stream_command,
)


def test_normalize_args_requires_command() -> None:
    with pytest.raises(ValueError):
        normalize_args([])


def test_normalize_args_reports_missing_executable() -> None:
    with pytest.raises(FileNotFoundError, match="not found on PATH"):
        normalize_args(["definitely-not-a-real-linter-binary"])


def test_run_command_captures_output() -> None:
    completed = run_command([sys.executable, "-c", "print('hello')"])

    assert completed.returncode == 0
    assert completed.stdout.strip() == "hello"


def test_run_command_raises_on_failure_when_checked() -> None:
    script = "import sys; sys.stderr.write('boom'); sys.exit(3)"

    with pytest.raises(SubprocessExecutionError) as excinfo:
        run_command([sys.executable, "-c", script])

    assert excinfo.value.returncode == 3
    assert excinfo.value.stderr == "boom"


def test_run_command_unchecked_returns_status() -> None:
    completed = run_command([sys.executable, "-c", "raise SystemExit(2)"], options=CommandOptions(check=False))

    assert completed.returncode == 2


def test_run_command_timeout_maps_to_124() -> None:
    options = CommandOptions(check=False, timeout=0.2)

    completed = run_command([sys.executable, "-c", "import time; time.sleep(10)"], options=options)

    assert completed.returncode == 124
    assert "timed out" in completed.stderr


def test_stream_command_reports_both_streams() -> None:
    script = (
        "import sys\n"
        "data = sys.stdin.read()\n"
        "sys.stdout.write(data.upper())\n"
        "sys.stdout.flush()\n"
        "sys.stderr.write('warned')\n"
        "sys.exit(1)\n"
    )
    chunks: dict[str, list[str]] = {"stdout": [], "stderr": []}

    def on_chunk(stream: str, text: str) -> None:
        chunks[stream].append(text)

    returncode = asyncio.run(
        stream_command([sys.executable, "-c", script], stdin_text="lint me", on_chunk=on_chunk),
    )

    assert returncode == 1
    assert "".join(chunks["stdout"]) == "LINT ME"
    assert "".join(chunks["stderr"]) == "warned"


def test_stream_command_tolerates_unread_stdin() -> None:
    received: list[str] = []

    returncode = asyncio.run(
        stream_command(
            [sys.executable, "-c", "print('done')"],
            stdin_text="x" * 200_000,
            on_chunk=lambda stream, text: received.append(text),
        ),
    )

    assert returncode == 0
    assert "".join(received).strip() == "done"


def test_stream_command_keeps_multibyte_characters_across_reads() -> None:
    script = "import sys\nsys.stdout.buffer.write(b'a' * 4095 + 'é\\n'.encode())\n"
    received: list[str] = []

    returncode = asyncio.run(
        stream_command([sys.executable, "-c", script], stdin_text="", on_chunk=lambda stream, text: received.append(text)),
    )

    joined = "".join(received)
    assert returncode == 0
    assert joined == "a" * 4095 + "é\n"
    assert "�" not in joined


def test_stream_command_flushes_truncated_character() -> None:
    script = "import sys\nsys.stdout.buffer.write('ok é'.encode()[:-1])\n"
    received: list[str] = []

    asyncio.run(
        stream_command([sys.executable, "-c", script], stdin_text="", on_chunk=lambda stream, text: received.append(text)),
    )

    assert "".join(received) == "ok �"
