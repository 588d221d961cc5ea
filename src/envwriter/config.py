""".envwriter.toml configuration loading.

Searches upward from cwd for ``.envwriter.toml`` and merges with CLI flags.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from envwriter.document import EnvDocument
from envwriter.environ import EnvironmentSink, NullEnvironmentSink, OsEnvironmentSink

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

CONFIG_FILENAME = ".envwriter.toml"


@dataclass
class EnvWriterConfig:
    """Resolved configuration for the current invocation."""

    env_file: str = ".env"
    line_ending: str | None = None
    cast_booleans: bool = False
    propagate: bool = False
    config_path: Path | None = None

    def environment_sink(self) -> EnvironmentSink:
        """Sink for :meth:`EnvDocument.set`: the process environment only when ``propagate`` is on."""
        return OsEnvironmentSink() if self.propagate else NullEnvironmentSink()

    def open_document(self, path: str | Path | None = None) -> EnvDocument:
        """Open *path* (default :attr:`env_file`) with these settings."""
        return EnvDocument(
            path if path is not None else self.env_file,
            line_ending=self.line_ending,
            cast_booleans=self.cast_booleans,
            environ=self.environment_sink(),
        )


def find_config_file(start: Path | None = None) -> Path | None:
    """Walk upward from *start* (default cwd) looking for ``.envwriter.toml``."""
    cur = (start or Path.cwd()).resolve()
    while True:
        candidate = cur / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if cur.parent == cur:
            return None
        cur = cur.parent


def load_config(path: Path | None = None) -> EnvWriterConfig:
    """Load and return config.  Returns defaults if no file found."""
    if path is None:
        path = find_config_file()
    if path is None:
        return EnvWriterConfig()

    raw: dict[str, Any] = tomllib.loads(path.read_text())
    section = raw.get("envwriter", {})

    return EnvWriterConfig(
        env_file=section.get("env_file", ".env"),
        line_ending=section.get("line_ending"),
        cast_booleans=bool(section.get("cast_booleans", False)),
        propagate=bool(section.get("propagate", False)),
        config_path=path,
    )
