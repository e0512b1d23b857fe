"""
Document loader invocation.

A loader template is a shell-quoted command line with two placeholders:
$1 is replaced by the input file path, $2 by a temp output path. Templates
without $2 are read from stdout; templates with $2 are read back from the
temp file after the command exits zero.
"""

import hashlib
import logging
import shlex
import tempfile
from pathlib import Path
from typing import Optional, Union

from .executor import (
    InvalidOutputEncoding,
    ProcessRunner,
    default_runner,
    run_command_with_output,
)
from .schema import LoaderCommand, LoaderMode

logger = logging.getLogger(__name__)

INPUT_PLACEHOLDER = "$1"
OUTPUT_PLACEHOLDER = "$2"
TEMP_PREFIX = "aichat-output-"


class LoaderError(RuntimeError):
    """Base class for loader failures."""


class LoaderConfigError(LoaderError):
    """Template could not be parsed."""


class LoaderNotInstalledError(LoaderError):
    """Loader program could not be spawned."""


class LoaderFailedError(LoaderError):
    """Loader ran and exited non-zero."""


class LoaderEncodingError(LoaderError):
    """Loader output is not valid UTF-8."""


class LoaderOutputError(LoaderError):
    """Output file written by the loader could not be read."""


def _sha256(value: str) -> str:
    return hashlib.sha256(value.encode()).hexdigest()


def temp_output_path(path: str, temp_dir: Optional[Union[str, Path]] = None) -> str:
    """
    Deterministic temp file for path: same input path, same output path.
    Concurrent output-file runs on the same input path share this file and are unsupported.
    """
    base = Path(temp_dir) if temp_dir is not None else Path(tempfile.gettempdir())
    return str(base / f"{TEMP_PREFIX}{_sha256(path)}")


def parse_loader_command(
    path: str,
    extension: str,
    template: str,
    temp_dir: Optional[Union[str, Path]] = None,
) -> LoaderCommand:
    """Split template, substitute placeholders and decide the result mode."""
    try:
        words = shlex.split(template)
    except ValueError as e:
        raise LoaderConfigError(
            f"Invalid document loader for extension '{extension}': `{template}`"
        ) from e
    if not words:
        raise LoaderConfigError(
            f"Invalid document loader for extension '{extension}': `{template}`"
        )

    outpath = temp_output_path(path, temp_dir)
    mode = LoaderMode.STDOUT
    substituted = []
    for word in words:
        if INPUT_PLACEHOLDER in word:
            word = word.replace(INPUT_PLACEHOLDER, path)
        if OUTPUT_PLACEHOLDER in word:
            mode = LoaderMode.OUTPUT_FILE
            word = word.replace(OUTPUT_PLACEHOLDER, outpath)
        substituted.append(word)

    return LoaderCommand(
        extension=extension,
        template=template,
        input_path=path,
        output_path=outpath,
        words=substituted,
        mode=mode,
    )


def _not_installed(command: LoaderCommand) -> LoaderNotInstalledError:
    return LoaderNotInstalledError(
        f"Unable to run `{command.display}`, perhaps '{command.program}' is not installed?"
    )


def _non_zero(command: LoaderCommand) -> str:
    return f"The command `{command.display}` exited with non-zero status."


def _run_stdout(command: LoaderCommand, runner: Optional[ProcessRunner]) -> str:
    try:
        result = run_command_with_output(command.program, command.args, runner=runner)
    except InvalidOutputEncoding as e:
        raise LoaderEncodingError(
            f"Loader `{command.display}` produced output that is not valid UTF-8"
        ) from e
    except OSError as e:
        raise _not_installed(command) from e
    if not result.success:
        if result.stderr:
            raise LoaderFailedError(f"Loader `{command.display}` failed: {result.stderr}")
        raise LoaderFailedError(_non_zero(command))
    return result.stdout


def _run_output_file(command: LoaderCommand, runner: Optional[ProcessRunner]) -> str:
    outpath = Path(command.output_path)
    # A stale file from an earlier run must not be mistaken for this run's output
    try:
        outpath.unlink(missing_ok=True)
    except OSError as e:
        raise LoaderOutputError(f"Unable to clear stale loader output file: {outpath}") from e
    try:
        # Talk to the runner directly: a missing exit code is a failure here
        status = (runner or default_runner()).run_status(command.program, command.args)
    except OSError as e:
        raise _not_installed(command) from e
    if status != 0:
        raise LoaderFailedError(_non_zero(command))
    try:
        contents = outpath.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LoaderOutputError(
            f"Failed to read file generated by the loader: {outpath}"
        ) from e
    try:
        outpath.unlink(missing_ok=True)
    except OSError as e:
        logger.debug("could not remove %s: %s", outpath, e)
    return contents


def run_loader_command(
    path: str,
    extension: str,
    loader_command: str,
    runner: Optional[ProcessRunner] = None,
    temp_dir: Optional[Union[str, Path]] = None,
) -> str:
    """
    Run the loader configured for extension on path and return the loaded text verbatim.
    Raises a LoaderError subclass describing what went wrong.
    """
    command = parse_loader_command(path, extension, loader_command, temp_dir)
    logger.debug("run `%s`", command.display)
    if command.mode is LoaderMode.OUTPUT_FILE:
        return _run_output_file(command, runner)
    return _run_stdout(command, runner)
