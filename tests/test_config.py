"""Tests for .envwriter.toml config loading."""

from __future__ import annotations

import pytest

from envwriter.config import EnvWriterConfig, find_config_file, load_config
from envwriter.environ import NullEnvironmentSink, OsEnvironmentSink


def test_load_config_invalid_toml_syntax(tmp_path):
    """Invalid TOML syntax in project file raises when loading config."""
    toml = tmp_path / ".envwriter.toml"
    toml.write_text("[envwriter\nenv_file = \"x\"")  # unclosed bracket
    with pytest.raises(ValueError):  # TOMLDecodeError subclasses ValueError
        load_config(toml)


def test_load_config_from_file(tmp_path):
    toml = tmp_path / ".envwriter.toml"
    toml.write_text("""\
[envwriter]
env_file = ".env.local"
line_ending = "crlf"
cast_booleans = true
propagate = true
""")
    cfg = load_config(toml)
    assert cfg.env_file == ".env.local"
    assert cfg.line_ending == "crlf"
    assert cfg.cast_booleans is True
    assert cfg.propagate is True
    assert cfg.config_path == toml


def test_load_config_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = load_config(path=None)
    assert cfg.env_file == ".env"
    assert cfg.line_ending is None
    assert cfg.cast_booleans is False
    assert cfg.propagate is False
    assert cfg.config_path is None


def test_load_config_missing_section(tmp_path):
    toml = tmp_path / ".envwriter.toml"
    toml.write_text("[other]\nkey = 1\n")
    cfg = load_config(toml)
    assert cfg.env_file == ".env"


def test_find_config_file_walks_upward(tmp_path):
    toml = tmp_path / ".envwriter.toml"
    toml.write_text("[envwriter]\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    assert find_config_file(nested) == toml.resolve()


def test_environment_sink_follows_propagate():
    assert isinstance(EnvWriterConfig().environment_sink(), NullEnvironmentSink)
    assert isinstance(EnvWriterConfig(propagate=True).environment_sink(), OsEnvironmentSink)


def test_open_document_applies_settings(tmp_path):
    p = tmp_path / ".env"
    p.write_text("A=1\n")
    cfg = EnvWriterConfig(env_file=str(p), line_ending="crlf", cast_booleans=True)
    doc = cfg.open_document()
    assert doc.output_path == p
    doc.set("FLAG", True).save()
    assert p.read_bytes() == b"A=1\r\nFLAG=true\r\n"


def test_open_document_explicit_path(tmp_path):
    p = tmp_path / "other.env"
    doc = EnvWriterConfig().open_document(p)
    assert doc.output_path == p
    assert doc.lines == []
