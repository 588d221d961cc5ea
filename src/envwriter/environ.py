"""Environment sinks -- where :meth:`EnvDocument.set` pushes each key/value pair.

The document never touches ``os.environ`` directly; it calls ``sink.set``
on whatever sink it was given, so tests and dry runs can swap in a sink
that only records.
"""

from __future__ import annotations

import os
from typing import Protocol


class EnvironmentSink(Protocol):
    """Receives every variable written with :meth:`EnvDocument.set`."""

    def set(self, name: str, value: str) -> None: ...


class OsEnvironmentSink:
    """Write into the current process environment.

    ``os.environ`` assignment also calls ``putenv``, so the variable is
    inherited by child processes started afterwards.
    """

    def set(self, name: str, value: str) -> None:
        os.environ[name] = value


class MemoryEnvironmentSink:
    """Record variables in :attr:`values` without touching the process."""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}

    def set(self, name: str, value: str) -> None:
        self.values[name] = value


class NullEnvironmentSink:
    """Discard everything."""

    def set(self, name: str, value: str) -> None:
        pass
