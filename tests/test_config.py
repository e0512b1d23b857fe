"""Tests for loader configuration loading and overrides."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from cmdloader.config import apply_overrides, default_config_path, load_config
from cmdloader.schema import LoaderConfig


def test_load_config_from_yaml(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text(
        "document_loaders:\n"
        "  pdf: \"pdftotext $1 -\"\n"
        "  .DOCX: \"pandoc --to plain $1\"\n"
    )
    cfg = load_config(p)
    assert cfg.document_loaders == {
        "pdf": "pdftotext $1 -",
        "docx": "pandoc --to plain $1",
    }


def test_load_config_empty_file(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("")
    assert load_config(p) == LoaderConfig()


def test_load_config_explicit_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_load_config_default_missing_is_empty(tmp_path, monkeypatch):
    monkeypatch.delenv("CMDLOADER_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert load_config() == LoaderConfig()


def test_default_config_path_env_override(tmp_path, monkeypatch):
    monkeypatch.setenv("CMDLOADER_CONFIG", str(tmp_path / "c.yaml"))
    assert default_config_path() == tmp_path / "c.yaml"


def test_default_config_path_xdg(tmp_path, monkeypatch):
    monkeypatch.delenv("CMDLOADER_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert default_config_path() == tmp_path / "cmdloader" / "config.yaml"


def test_load_config_non_mapping(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="mapping"):
        load_config(p)


def test_load_config_bad_types(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("document_loaders:\n  pdf: [1, 2]\n")
    with pytest.raises(ValidationError):
        load_config(p)


def test_apply_overrides():
    cfg = LoaderConfig(document_loaders={"pdf": "old $1"})
    new = apply_overrides(cfg, ["pdf=new $1", ".Md=cat $1"])
    assert new.document_loaders == {"pdf": "new $1", "md": "cat $1"}
    assert cfg.document_loaders == {"pdf": "old $1"}


def test_apply_overrides_keeps_equals_in_template():
    new = apply_overrides(LoaderConfig(), ["x=tool --opt=1 $1"])
    assert new.document_loaders["x"] == "tool --opt=1 $1"


def test_apply_overrides_rejects_missing_equals():
    with pytest.raises(ValueError, match="EXT=TEMPLATE"):
        apply_overrides(LoaderConfig(), ["pdf"])
