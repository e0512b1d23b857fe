"""Loader configuration: YAML file mapping extensions to loader templates."""

import os
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from .schema import LoaderConfig

CONFIG_ENV = "CMDLOADER_CONFIG"


def _xdg_config_home() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def default_config_path() -> Path:
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(env)
    return _xdg_config_home() / "cmdloader" / "config.yaml"


def _read_yaml(path: Path) -> Dict[str, Any]:
    import yaml

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Top-level YAML must be a mapping, got: {type(data).__name__}")
    return data


def load_config(path: Optional[Path] = None) -> LoaderConfig:
    """
    Load loader templates. An explicit path must exist; the default location
    may be absent, which yields an empty configuration.
    """
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
    else:
        path = default_config_path()
        if not path.exists():
            return LoaderConfig()
    return LoaderConfig.model_validate(_read_yaml(path))


def apply_overrides(config: LoaderConfig, pairs: Iterable[str]) -> LoaderConfig:
    """Return a copy of config with 'ext=template' pairs applied."""
    loaders = dict(config.document_loaders)
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"Loader override must look like EXT=TEMPLATE, got: {pair}")
        ext, template = pair.split("=", 1)
        loaders[ext.strip()] = template
    return LoaderConfig(document_loaders=loaders)
