# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""envwriter -- edit .env files in place without losing comments, order or quoting."""

from __future__ import annotations

from pathlib import Path

from envwriter.document import EnvDocument
from envwriter.env_file import Assignment
from envwriter.environ import (
    EnvironmentSink,
    MemoryEnvironmentSink,
    NullEnvironmentSink,
    OsEnvironmentSink,
)
from envwriter.errors import ConfigurationError, EnvFileError, EnvWriterError

__all__ = [
    "__version__",
    "Assignment",
    "ConfigurationError",
    "EnvDocument",
    "EnvFileError",
    "EnvWriterError",
    "EnvironmentSink",
    "MemoryEnvironmentSink",
    "NullEnvironmentSink",
    "OsEnvironmentSink",
    "load",
]
__version__ = "0.1.0"


def load(path: str | Path, **kwargs: object) -> EnvDocument:
    """Read *path* into a new :class:`EnvDocument` (output path left unset)."""
    return EnvDocument(**kwargs).load(path)  # type: ignore[arg-type]
