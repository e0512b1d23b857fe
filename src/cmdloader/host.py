"""Host probes: OS tag and default shell. Never raise; degrade to conservative defaults."""

import os
import sys
from pathlib import Path
from typing import Mapping, Optional

from .schema import Shell

OS_RELEASE = Path("/etc/os-release")

KNOWN_SHELLS = ("bash", "zsh", "fish", "pwsh")


def current_os() -> str:
    """sys.platform normalised to linux / macos / windows."""
    plat = sys.platform
    if plat.startswith("linux"):
        return "linux"
    if plat == "darwin":
        return "macos"
    if plat in ("win32", "cygwin"):
        return "windows"
    return plat


def os_tag(os_name: str, os_release_text: Optional[str] = None) -> str:
    """Return '<os>/<ID>' when os-release has an ID= line on linux, else os_name."""
    if os_name != "linux" or os_release_text is None:
        return os_name
    for line in os_release_text.splitlines():
        if line.startswith("ID="):
            return f"{os_name}/{line[len('ID='):]}"
    return os_name


def _read_os_release(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def detect_os(os_release: Path = OS_RELEASE) -> str:
    os_name = current_os()
    text = _read_os_release(os_release) if os_name == "linux" else None
    return os_tag(os_name, text)


def _windows_shell(ps_module_path: Optional[str]) -> Shell:
    if ps_module_path is not None:
        value = ps_module_path.lower()
        if len(value.split(";")) >= 3:
            if "powershell\\7\\" in value:
                return Shell(name="pwsh", cmd="pwsh.exe", arg="-c")
            return Shell(name="powershell", cmd="powershell.exe", arg="-Command")
    return Shell(name="cmd", cmd="cmd.exe", arg="/C")


def resolve_shell(os_name: str, environ: Mapping[str, str]) -> Shell:
    """
    Pick the interpreter for os_name from an environment snapshot.
    Unrecognised POSIX shells fall back to sh; Windows falls back to cmd.
    """
    if os_name == "windows":
        return _windows_shell(environ.get("PSModulePath"))
    shell = environ.get("SHELL", "/bin/sh")
    name = shell.rsplit("/", 1)[-1]
    if name in KNOWN_SHELLS:
        return Shell(name=name, cmd=name, arg="-c")
    return Shell(name="sh", cmd="sh", arg="-c")


def detect_shell() -> Shell:
    return resolve_shell(current_os(), os.environ)
