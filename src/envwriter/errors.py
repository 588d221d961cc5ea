"""Exceptions raised by envwriter."""

from __future__ import annotations


class EnvWriterError(Exception):
    """Base class for envwriter errors."""


class EnvFileError(EnvWriterError, OSError):
    """An env file could not be read, or its destination cannot be written."""


class ConfigurationError(EnvWriterError):
    """The document is missing a setting required for the operation (e.g. output path)."""
