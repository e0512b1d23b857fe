"""
Command execution abstraction.

Callers never use subprocess directly. They go through a ProcessRunner so that
tests can substitute scripted results instead of launching real programs.
"""

import os
import subprocess
from pathlib import Path
from typing import Dict, Optional, Protocol, Sequence, Union

from .schema import RunResult


class InvalidOutputEncoding(ValueError):
    """Captured output of a command is not valid UTF-8."""


class ProcessRunner(Protocol):
    """Protocol for command execution. Spawn failures raise OSError."""

    def run_status(
        self, cmd: str, args: Sequence[str], env: Optional[Dict[str, str]] = None
    ) -> Optional[int]:
        """Run with the parent's stdio attached. Returns the exit code, None if there was none."""
        ...

    def run_output(
        self, cmd: str, args: Sequence[str], env: Optional[Dict[str, str]] = None
    ) -> RunResult:
        """Run with stdout and stderr captured and decoded."""
        ...


def _merged_env(env: Optional[Dict[str, str]]) -> Optional[Dict[str, str]]:
    if not env:
        return None
    merged = dict(os.environ)
    merged.update(env)
    return merged


def _decode(data: bytes, stream: str) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidOutputEncoding(f"Invalid UTF-8 in {stream}") from e


class SubprocessRunner:
    """Default implementation: run the command via subprocess."""

    def run_status(
        self, cmd: str, args: Sequence[str], env: Optional[Dict[str, str]] = None
    ) -> Optional[int]:
        proc = subprocess.run([cmd, *args], env=_merged_env(env))
        # Negative return codes mean the child was killed by a signal
        if proc.returncode < 0:
            return None
        return proc.returncode

    def run_output(
        self, cmd: str, args: Sequence[str], env: Optional[Dict[str, str]] = None
    ) -> RunResult:
        proc = subprocess.run([cmd, *args], env=_merged_env(env), capture_output=True)
        return RunResult(
            stdout=_decode(proc.stdout, "stdout"),
            stderr=_decode(proc.stderr, "stderr"),
            returncode=proc.returncode if proc.returncode >= 0 else None,
        )


def default_runner() -> ProcessRunner:
    return SubprocessRunner()


def run_command(
    cmd: str,
    args: Sequence[str],
    env: Optional[Dict[str, str]] = None,
    runner: Optional[ProcessRunner] = None,
) -> int:
    """Run cmd and return its exit code; 0 when the OS reported none."""
    runner = runner or default_runner()
    code = runner.run_status(cmd, list(args), env)
    return code if code is not None else 0


def run_command_with_output(
    cmd: str,
    args: Sequence[str],
    env: Optional[Dict[str, str]] = None,
    runner: Optional[ProcessRunner] = None,
) -> RunResult:
    """Run cmd capturing stdout/stderr. Raises InvalidOutputEncoding on non-UTF-8 output."""
    runner = runner or default_runner()
    return runner.run_output(cmd, list(args), env)


def edit_file(
    editor: str,
    path: Union[str, Path],
    runner: Optional[ProcessRunner] = None,
    editor_args: Sequence[str] = (),
) -> None:
    """Open path in editor and block until it exits. The exit status is ignored."""
    runner = runner or default_runner()
    runner.run_status(editor, [*editor_args, str(path)])
