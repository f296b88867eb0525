# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` and asyncio process execution."""

from __future__ import annotations

import asyncio
import codecs
import shutil

# Bandit: subprocess usage is intentional; commands are argument lists and
# ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final, Literal

StreamName = Literal["stdout", "stderr"]
ChunkCallback = Callable[[StreamName, str], None]

TIMEOUT_RETURNCODE: Final[int] = 124
READ_CHUNK_SIZE: Final[int] = 4096


@dataclass(slots=True, frozen=True)
class CommandOptions:
    """Immutable command execution options."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    check: bool = True
    timeout: float | None = None


class SubprocessExecutionError(RuntimeError):
    """Raised when a subprocess exits with a non-zero status while ``check`` is true."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str | None,
        stderr: str | None,
    ) -> None:
        """Initialise the error with captured subprocess metadata.

        Args:
            command: Normalised command sequence that was executed.
            returncode: Exit status reported by the subprocess.
            stdout: Captured standard output stream.
            stderr: Captured standard error stream.
        """
        super().__init__(
            f"Command '{command[0]}' exited with status {returncode}. stderr: {stderr or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def _ensure_text(value: str | bytes | None) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return value.decode(errors="replace")


def normalize_args(args: Sequence[str]) -> list[str]:
    """Resolve the executable of ``args`` against ``PATH``.

    Args:
        args: Raw command arguments supplied by the caller.

    Returns:
        list[str]: Argument list whose first entry is an absolute path.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be found on ``PATH``.
    """

    if not args:
        raise ValueError("subprocess command requires at least one argument")

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        raise FileNotFoundError(f"Executable '{head}' was not found on PATH")
    return [resolved, *rest]


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]:
    """Execute ``args`` to completion and capture its text output.

    Args:
        args: Command and argument sequence to execute.
        options: Execution options; defaults to :class:`CommandOptions`.

    Returns:
        CompletedProcess[str]: Subprocess execution metadata. Timeouts are
        reported with exit status ``124``.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
        SubprocessExecutionError: When ``check`` is true and the process exits
            with a non-zero status.
    """

    normalized = normalize_args(args)
    resolved = options or CommandOptions()

    try:
        completed: CompletedProcess[str] = subprocess.run(  # nosec B603 - argument list, no shell
            normalized,
            cwd=str(resolved.cwd) if resolved.cwd is not None else None,
            env=dict(resolved.env) if resolved.env is not None else None,
            check=False,
            capture_output=True,
            text=True,
            timeout=resolved.timeout,
        )
    except subprocess.TimeoutExpired as exc:
        stderr = _ensure_text(exc.stderr)
        timeout_msg = f"Command timed out after {resolved.timeout:.1f}s"
        completed = subprocess.CompletedProcess(
            args=normalized,
            returncode=TIMEOUT_RETURNCODE,
            stdout=_ensure_text(exc.stdout) or "",
            stderr=f"{stderr}\n{timeout_msg}" if stderr else timeout_msg,
        )

    if resolved.check and completed.returncode != 0:
        raise SubprocessExecutionError(normalized, completed.returncode, completed.stdout, completed.stderr)
    return completed


async def _feed(stdin: asyncio.StreamWriter, text: str) -> None:
    try:
        stdin.write(text.encode())
        await stdin.drain()
    except (BrokenPipeError, ConnectionResetError):
        # The linter may exit before consuming its input; its output still counts.
        pass
    finally:
        stdin.close()


async def _pump(stream: asyncio.StreamReader, name: StreamName, on_chunk: ChunkCallback) -> None:
    # Multibyte characters may straddle two reads.
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    while True:
        data = await stream.read(READ_CHUNK_SIZE)
        if not data:
            tail = decoder.decode(b"", final=True)
            if tail:
                on_chunk(name, tail)
            return
        text = decoder.decode(data)
        if text:
            on_chunk(name, text)


async def stream_command(
    args: Sequence[str],
    *,
    stdin_text: str,
    on_chunk: ChunkCallback,
    env: Mapping[str, str] | None = None,
) -> int:
    """Run ``args`` feeding ``stdin_text`` and report output chunks as they arrive.

    Standard output and standard error are read concurrently; ``on_chunk`` is
    invoked once per chunk with the originating stream name.

    Args:
        args: Command and argument sequence to execute.
        stdin_text: Text written to the process before closing its stdin.
        on_chunk: Callback receiving ``(stream, text)`` pairs in arrival order.
        env: Optional environment for the child process.

    Returns:
        int: Exit status of the process.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
    """

    normalized = normalize_args(args)
    process = await asyncio.create_subprocess_exec(
        *normalized,
        stdin=asyncio.subprocess.PIPE,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        env=dict(env) if env is not None else None,
    )
    assert process.stdin is not None and process.stdout is not None and process.stderr is not None
    await asyncio.gather(
        _feed(process.stdin, stdin_text),
        _pump(process.stdout, "stdout", on_chunk),
        _pump(process.stderr, "stderr", on_chunk),
    )
    return await process.wait()


__all__ = [
    "ChunkCallback",
    "CommandOptions",
    "StreamName",
    "SubprocessExecutionError",
    "normalize_args",
    "run_command",
    "stream_command",
]
