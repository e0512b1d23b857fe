"""Pick the loader for a file by extension and load it as text."""

from pathlib import Path
from typing import Optional, Union

from .executor import ProcessRunner
from .loader import run_loader_command
from .schema import LoaderConfig


def extension_of(path: Union[str, Path]) -> str:
    return Path(path).suffix.lstrip(".").lower()


def loader_for(config: LoaderConfig, path: Union[str, Path]) -> Optional[str]:
    return config.document_loaders.get(extension_of(path))


def load_document(
    path: Union[str, Path],
    config: LoaderConfig,
    runner: Optional[ProcessRunner] = None,
) -> str:
    """Run the configured loader for path, or read it as plain UTF-8 text if none is configured."""
    template = loader_for(config, path)
    if template is None:
        return Path(path).read_text(encoding="utf-8")
    return run_loader_command(str(path), extension_of(path), template, runner=runner)
