"""Subprocess execution with Result-based error handling.

Every external tool (git, npm) is invoked through a ``CommandRunner`` so the
release steps can be exercised in tests with a scripted runner instead of
real processes.

Usage:
    runner = SubprocessRunner(cwd=Path("."))
    match runner.run(["git", "status", "--porcelain"]):
        case Ok(stdout):
            print(stdout)
        case Err(error):
            print(f"Failed: {error.stderr}")
"""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from screw_it.core.result import Err, Ok, Result

__all__ = ["CommandRunner", "ProcessError", "SubprocessRunner", "format_command", "run"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process (-1 if it could not start).
        stdout: Standard output (may be empty).
        stderr: Standard error (contains error details).
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def output(self) -> str:
        """Combined stderr and stdout, for matching error signatures."""
        return "\n".join(part for part in (self.stderr.strip(), self.stdout.strip()) if part)

    def detail(self) -> str:
        """Tool output if there is any, else the command summary."""
        return self.output or str(self)

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


class CommandRunner(Protocol):
    """Runs an external command and returns its stdout."""

    def run(self, cmd: list[str]) -> Result[str, ProcessError]: ...


def format_command(cmd: list[str]) -> str:
    return " ".join(shlex.quote(part) for part in cmd)


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return stdout or error.

    No timeout is applied: publishing may legitimately take a long time.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout="",
                stderr=str(e),
            )
        )

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


class SubprocessRunner:
    """CommandRunner backed by ``subprocess``.

    Attributes:
        cwd: Directory every command runs in.
    """

    def __init__(self, cwd: Path, *, echo: Callable[[str], None] | None = None) -> None:
        self.cwd = cwd
        self._echo = echo

    def run(self, cmd: list[str]) -> Result[str, ProcessError]:
        if self._echo is not None:
            self._echo(f"$ {format_command(cmd)}")
        return run(cmd, cwd=self.cwd)
