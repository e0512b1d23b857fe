"""Run external programs portably and load documents through configured loader commands."""

from .executor import (
    InvalidOutputEncoding,
    ProcessRunner,
    SubprocessRunner,
    edit_file,
    run_command,
    run_command_with_output,
)
from .host import detect_os, detect_shell, os_tag, resolve_shell
from .loader import (
    LoaderConfigError,
    LoaderEncodingError,
    LoaderError,
    LoaderFailedError,
    LoaderNotInstalledError,
    LoaderOutputError,
    parse_loader_command,
    run_loader_command,
    temp_output_path,
)
from .schema import LoaderCommand, LoaderMode, RunResult, Shell

__all__ = [
    "InvalidOutputEncoding",
    "LoaderCommand",
    "LoaderConfigError",
    "LoaderEncodingError",
    "LoaderError",
    "LoaderFailedError",
    "LoaderMode",
    "LoaderNotInstalledError",
    "LoaderOutputError",
    "ProcessRunner",
    "RunResult",
    "Shell",
    "SubprocessRunner",
    "detect_os",
    "detect_shell",
    "edit_file",
    "os_tag",
    "parse_loader_command",
    "resolve_shell",
    "run_command",
    "run_command_with_output",
    "run_loader_command",
    "temp_output_path",
]
