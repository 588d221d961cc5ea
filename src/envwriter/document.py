# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""EnvDocument -- an editable .env file that keeps its own formatting.

The document holds the file as a list of canonical lines (no terminators).
Every lookup re-scans that list with :func:`envwriter.env_file.find_assignment`;
there is no separate key index, so the lines are always the single source of
truth.  :meth:`EnvDocument.set` replaces the matched line by index or appends
a new one, leaving every other line byte-for-byte alone.

Typical use::

    doc = EnvDocument(".env")
    doc.set("API_URL", "https://example.com").set("DEBUG", "1", comment="dev only")
    doc.save()
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from envwriter.env_file import (
    NEWLINE_RE,
    Assignment,
    cast_value,
    find_assignment,
    find_key_line,
    format_line,
    iter_assignments,
    normalize_newlines,
)
from envwriter.environ import EnvironmentSink, OsEnvironmentSink
from envwriter.errors import ConfigurationError, EnvFileError

logger = logging.getLogger(__name__)

DEFAULT_LINE_ENDING: str = "\n"

LINE_ENDINGS: dict[str, str] = {
    "lf": "\n",
    "crlf": "\r\n",
    "cr": "\r",
}


def detect_line_ending(text: str) -> str | None:
    """Return the first newline sequence found in *text*, or ``None``."""
    m = NEWLINE_RE.search(text)
    return m.group(0) if m else None


def resolve_line_ending(style: str) -> str:
    """Map ``lf``/``crlf``/``cr`` (or the literal sequence) to the sequence itself."""
    resolved = LINE_ENDINGS.get(style.lower(), style)
    if resolved not in LINE_ENDINGS.values():
        raise ValueError(
            f"Unknown line ending {style!r}. Use one of: {', '.join(LINE_ENDINGS)}"
        )
    return resolved


def is_writable(path: Path) -> bool:
    """Check that *path* can be written, or created inside its parent directory."""
    if path.exists():
        return path.is_file() and os.access(path, os.W_OK)
    parent = path.parent
    return parent.is_dir() and os.access(parent, os.W_OK)


class EnvDocument:
    """An in-memory .env file that can be queried, patched and saved.

    Parameters
    ----------
    path : str or Path, optional
        File to edit.  Loaded when it exists, and used as the output path in
        any case (so it must be writable, or creatable).
    line_ending : str, optional
        ``lf``, ``crlf``, ``cr`` or the literal sequence.  Default: detect
        from the loaded file, else ``\\n``.
    cast_booleans : bool, default False
        Write ``True``/``False`` as ``true``/``false`` instead of ``1``/``""``.
    environ : EnvironmentSink, optional
        Receives every variable passed to :meth:`set`.  Default:
        :class:`~envwriter.environ.OsEnvironmentSink`.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        *,
        line_ending: str | None = None,
        cast_booleans: bool = False,
        environ: EnvironmentSink | None = None,
    ) -> None:
        self._lines: list[str] = []
        self._output_path: Path | None = None
        self._line_ending: str | None = None
        self._detected_line_ending: str | None = None
        self._cast_booleans = cast_booleans
        self._environ: EnvironmentSink = environ if environ is not None else OsEnvironmentSink()

        if line_ending is not None:
            self.set_line_ending(line_ending)
        if path is not None:
            if Path(path).is_file():
                self.load(path)
            self.set_output_path(path)

    # ------------------------------------------------------------------
    # Loading / configuration
    # ------------------------------------------------------------------

    def load(self, path: str | Path) -> EnvDocument:
        """Replace the document contents with the file at *path*."""
        path = Path(path)
        if not path.is_file():
            raise EnvFileError(f"Unable to read environment file at {path}.")
        try:
            text = path.read_bytes().decode("utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise EnvFileError(f"Unable to read environment file at {path}: {e}") from e

        self._detected_line_ending = detect_line_ending(text)
        text = normalize_newlines(text).strip()
        self._lines = text.split("\n") if text else []
        logger.debug("Loaded %d line(s) from %s", len(self._lines), path)
        return self

    def set_output_path(self, path: str | Path) -> EnvDocument:
        """Set where :meth:`save` writes.  Fails now if the path is not writable."""
        path = Path(path)
        if not is_writable(path):
            raise EnvFileError(f"Unwritable environment file at {path}.")
        self._output_path = path
        return self

    def set_line_ending(self, style: str | None) -> EnvDocument:
        """Use *style* for output; ``None`` goes back to the detected ending."""
        self._line_ending = None if style is None else resolve_line_ending(style)
        return self

    def cast_booleans(self, enabled: bool = True) -> EnvDocument:
        """Enable or disable writing booleans as ``true``/``false``."""
        self._cast_booleans = enabled
        return self

    @property
    def output_path(self) -> Path | None:
        return self._output_path

    @property
    def line_ending(self) -> str:
        """The sequence :meth:`save` will use."""
        return self._line_ending or self._detected_line_ending or DEFAULT_LINE_ENDING

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    # ------------------------------------------------------------------
    # Query / patch
    # ------------------------------------------------------------------

    def get(self, key: str) -> Assignment | None:
        """Return the first assignment of *key*, or ``None`` if it is not defined."""
        return find_assignment(self._lines, key)

    def set(
        self,
        key: str,
        value: object,
        comment: str | None = None,
        export: bool | None = None,
    ) -> EnvDocument:
        """Add or update *key*.

        When *key* already exists, a *comment* or *export* of ``None`` keeps
        the current one; pass ``""`` or ``False`` to clear it.  New keys are
        appended at the end of the document.  A first definition that cannot
        be decoded (e.g. an unterminated quote) is overwritten in place, with
        no comment or export carried over.

        The environment sink runs before the document changes, so a value it
        rejects leaves the lines untouched.
        """
        match = self.get(key)
        if match is not None:
            if comment is None:
                comment = match.comment
            if export is None:
                export = match.export
            index: int | None = match.index
        else:
            index = find_key_line(self._lines, key)

        line = format_line(
            key, value, comment or "", bool(export), cast_booleans=self._cast_booleans
        )
        self._environ.set(key, cast_value(value, self._cast_booleans))

        if index is not None:
            self._lines[index] = line
            logger.debug("Replaced %s at line %d", key, index + 1)
        else:
            self._lines.append(line)
            logger.debug("Appended %s", key)
        return self

    def line(self, text: str = "") -> EnvDocument:
        """Append *text* as raw, unparsed line(s), e.g. a comment or a blank separator."""
        self._lines.extend(normalize_newlines(text).split("\n"))
        return self

    def keys(self) -> list[str]:
        """Return defined keys in file order (first definition only)."""
        seen: dict[str, None] = {}
        for assignment in iter_assignments(self._lines):
            seen.setdefault(assignment.key, None)
        return list(seen)

    def to_dict(self) -> dict[str, str]:
        """Return key -> value for every key, as :meth:`get` would see it."""
        result: dict[str, str] = {}
        for key in self.keys():
            match = self.get(key)
            if match is not None:
                result[key] = match.value
        return result

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __iter__(self) -> Iterator[Assignment]:
        return iter_assignments(self._lines)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def render(self) -> str:
        """Return the file text: trimmed, with the output line ending and one trailing newline."""
        text = "\n".join(self._lines).strip()
        eol = self.line_ending
        return text.replace("\n", eol) + eol

    def __str__(self) -> str:
        return self.render()

    def save(self, path: str | Path | None = None) -> EnvDocument:
        """Write the document to *path*, or to the configured output path."""
        if path is not None:
            self.set_output_path(path)
        if self._output_path is None:
            raise ConfigurationError("Output file path is not set.")
        try:
            self._output_path.write_bytes(self.render().encode("utf-8"))
        except OSError as e:
            raise EnvFileError(
                f"Failed to write environment file at {self._output_path}: {e}"
            ) from e
        logger.debug("Saved %d line(s) to %s", len(self._lines), self._output_path)
        return self
