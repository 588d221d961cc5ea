"""Shared fixtures for envwriter tests."""

from __future__ import annotations

import os

import pytest
from click.testing import CliRunner

from envwriter.environ import MemoryEnvironmentSink

SAMPLE_ENV = r'''# Application settings
APP_NAME=envwriter
DOUBLE_QUOTED_VAR="hello world"
SINGLE_QUOTED_VAR='single quoted'
NO_QUOTES_VAR=oldval # keep
export EXPORT_VAR=exported

HAS_COMMENT_VAR="value" # this is a comment test
HAS_COMMENT_REPLACEMENT_VAR2=value2 # replace me
ESCAPED_VAR="say \"hi\" with a \\ backslash"
EMPTY_VAR=
#IS_A_COMMENT_VAR=commented
IS_A_COMMENT_VAR=real
'''


@pytest.fixture(autouse=True)
def _restore_environ():
    """Documents push every ``set`` into os.environ by default; undo that after each test."""
    saved = dict(os.environ)
    yield
    os.environ.clear()
    os.environ.update(saved)


@pytest.fixture()
def sample_env(tmp_path):
    """Create a sample .env file and return its path."""
    p = tmp_path / ".env"
    p.write_text(SAMPLE_ENV)
    return p


@pytest.fixture()
def sink() -> MemoryEnvironmentSink:
    return MemoryEnvironmentSink()


@pytest.fixture()
def runner(tmp_path, monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    """CliRunner inside an empty tmp dir so no stray .envwriter.toml or ENVWRITER_FILE applies."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ENVWRITER_FILE", raising=False)
    return CliRunner()


@pytest.fixture()
def sample_text() -> str:
    """The exact contents written by ``sample_env``."""
    return SAMPLE_ENV
