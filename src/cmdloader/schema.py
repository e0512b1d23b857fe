"""
Data model for command execution and document loaders.

Typed records passed between the host probes, the process runner and the loader invoker.
"""

import shlex
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


# --- Host ---


class Shell(BaseModel):
    """How to ask an interpreter to run a one-line script."""

    model_config = ConfigDict(frozen=True)

    name: str
    cmd: str
    arg: str


# --- Process Runner ---


class RunResult(BaseModel):
    """Result of running a command with captured output."""

    stdout: str = ""
    stderr: str = ""
    returncode: Optional[int] = None  # None when the OS reported no exit code

    @property
    def success(self) -> bool:
        return self.returncode == 0


# --- Loader Invoker ---


class LoaderMode(str, Enum):
    STDOUT = "stdout"
    OUTPUT_FILE = "output_file"


class LoaderCommand(BaseModel):
    """A loader template after placeholder substitution."""

    model_config = ConfigDict(frozen=True)

    extension: str
    template: str
    input_path: str
    output_path: str  # only read back in OUTPUT_FILE mode
    words: Tuple[str, ...]
    mode: LoaderMode = LoaderMode.STDOUT

    @property
    def program(self) -> str:
        return self.words[0]

    @property
    def args(self) -> List[str]:
        return list(self.words[1:])

    @property
    def display(self) -> str:
        """Re-quoted command line, for messages and logs only."""
        return shlex.join(self.words)


# --- Configuration ---


class LoaderConfig(BaseModel):
    """Configured document loaders, keyed by file extension."""

    document_loaders: Dict[str, str] = Field(default_factory=dict)

    @field_validator("document_loaders")
    @classmethod
    def _normalize_extensions(cls, v: Dict[str, str]) -> Dict[str, str]:
        return {k.lstrip(".").lower(): t for k, t in v.items()}
