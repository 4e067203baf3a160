"""Subprocess execution with Result-based error handling.

Wraps subprocess.run so that a failing, missing or hung executable comes
back as a ``ProcessError`` value carrying both captured streams, instead
of an exception.

Usage:
    cmd = tool_command(Path("/opt/ovr/ovr-platform-util"), 'create-pwa --out="x.apk"')
    match run(cmd, cwd=Path("."), timeout=300.0):
        case Ok(output):
            print(output.stdout)
        case Err(error):
            print(f"Failed: {error.stderr}")
"""

from __future__ import annotations

import os
import shlex
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ovrpack.core.result import Err, Ok, Result

__all__ = ["ProcessError", "ProcessOutput", "run", "tool_command"]


@dataclass(frozen=True, slots=True)
class ProcessOutput:
    """Captured streams of a process that exited with status 0."""

    stdout: str
    stderr: str


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process, -1 if it never ran to
            completion (spawn failure or timeout).
        stdout: Standard output (may be empty).
        stderr: Standard error (contains error details).
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:2])
        if len(self.command) > 2:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def _as_text(stream: str | bytes | None) -> str:
    if stream is None:
        return ""
    if isinstance(stream, bytes):
        return stream.decode("utf-8", errors="replace")
    return stream


def _command_tuple(cmd: Sequence[str] | str) -> tuple[str, ...]:
    if isinstance(cmd, str):
        return (cmd,)
    return tuple(cmd)


def tool_command(executable: Path, args: str) -> list[str] | str:
    """Combine an executable and a single argument string into a command.

    On Windows the command line is handed to CreateProcess as is. Elsewhere
    it is split on whitespace outside quotes, and the quotes around
    ``--name="value"`` tokens are stripped. Only double quotes are
    special, so secrets with backslashes reach the tool unchanged.

    Raises:
        ValueError: ``args`` has unbalanced quotes.
    """
    if os.name == "nt":
        return f'"{executable}" {args}'
    lexer = shlex.shlex(args, posix=True)
    lexer.whitespace_split = True
    lexer.escape = ""
    lexer.quotes = '"'
    lexer.commenters = ""
    return [str(executable), *lexer]


def run(
    cmd: Sequence[str] | str,
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[ProcessOutput, ProcessError]:
    """Execute a command and capture both output streams.

    Args:
        cmd: Argument list, or a full command line (Windows only).
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(ProcessOutput) on exit status 0, Err(ProcessError) otherwise.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        return Err(
            ProcessError(
                command=_command_tuple(cmd),
                returncode=-1,
                stdout=_as_text(e.stdout),
                stderr=f"Command timed out after {timeout}s\n{_as_text(e.stderr)}".rstrip(),
            )
        )
    except OSError as e:
        return Err(
            ProcessError(
                command=_command_tuple(cmd),
                returncode=-1,
                stdout="",
                stderr=str(e),
            )
        )

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=_command_tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(ProcessOutput(stdout=proc.stdout, stderr=proc.stderr))
