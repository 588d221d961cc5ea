"""Line grammar for .env files: find, decode and build assignment lines.

An assignment line looks like::

    [export ]KEY=VALUE[ # COMMENT]

Handles:
  - ``export KEY=VALUE`` prefix
  - single- and double-quoted values with ``\\``-escaped quotes and backslashes
  - bare values, trimmed, with an optional trailing ``# comment``
  - comment-only and blank lines, which are never assignments

Lookup is per key: a cheap probe finds the first line defining the key and
its quote style, then a full pattern for that style decodes the same line.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

NEWLINE_RE = re.compile(r"\r\n|\r|\n")

# Keys discovered when scanning a whole file (lookups take any literal key).
_ANY_KEY_RE = re.compile(
    r"""
    ^(?:export[ \t])?[ \t]*
    (?P<key>[^\s=\#'"]+)    # key
    [ \t]*=
    """,
    re.VERBOSE,
)

# Values written bare must not contain any of these.
_NEEDS_QUOTES_RE = re.compile(r"""[#\s"'\\]|\\n""")

_ESCAPE_PAIR_RE = re.compile(r"\\(.)")


@dataclass(frozen=True)
class Assignment:
    """One decoded assignment line.

    ``line`` is the exact text that was matched and ``index`` its position in
    the document, or ``-1`` when the line was parsed on its own.
    ``quote`` is ``'``, ``"`` or ``""`` for a bare value.
    """

    key: str
    value: str
    comment: str = ""
    export: bool = False
    quote: str = ""
    line: str = ""
    index: int = -1


def normalize_newlines(text: str) -> str:
    """Replace every ``\\r\\n``, ``\\r`` and ``\\n`` with ``\\n``."""
    return NEWLINE_RE.sub("\n", text)


def _probe_re(key: str) -> re.Pattern[str]:
    return re.compile(
        r"^(?:export[ \t])?[ \t]*" + re.escape(key) + r"""[ \t]*=[ \t]*(?P<quote>['"])?"""
    )


def _quoted_re(key: str, quote: str) -> re.Pattern[str]:
    q = re.escape(quote)
    return re.compile(
        r"^(?P<export>export[ \t])?[ \t]*"
        r"(?P<key>" + re.escape(key) + r")[ \t]*=[ \t]*"
        + q
        + r"(?P<value>[^" + q + r"\\]*(?:\\.[^" + q + r"\\]*)*)"
        + q
        + r"[ \t]*(?:#[ \t]*(?P<comment>.*))?$"
    )


def _bare_re(key: str) -> re.Pattern[str]:
    return re.compile(
        r"^(?P<export>export[ \t])?[ \t]*"
        r"(?P<key>" + re.escape(key) + r")[ \t]*=[ \t]*"
        r"(?P<value>.*?)[ \t]*(?:#[ \t]*(?P<comment>.*))?$"
    )


def _unescape(value: str, quote: str) -> str:
    """Undo ``\\\\`` and ``\\<quote>``; other escape pairs stay as written."""

    def repl(m: re.Match[str]) -> str:
        ch = m.group(1)
        return ch if ch in ("\\", quote) else m.group(0)

    return _ESCAPE_PAIR_RE.sub(repl, value)


def parse_assignment(line: str, key: str, index: int = -1) -> Assignment | None:
    """Decode *line* as the assignment of *key*, or return ``None``.

    ``None`` means the line does not define *key*, or it does but cannot be
    decoded (e.g. an unterminated quote).
    """
    probe = _probe_re(key).match(line)
    if probe is None:
        return None

    quote = probe.group("quote") or ""
    if quote:
        m = _quoted_re(key, quote).match(line)
        if m is None:
            return None
        value = _unescape(m.group("value"), quote)
    else:
        m = _bare_re(key).match(line)
        if m is None:
            return None
        value = m.group("value")

    return Assignment(
        key=m.group("key"),
        value=value,
        comment=(m.group("comment") or "").rstrip(),
        export=bool(m.group("export")),
        quote=quote,
        line=line,
        index=index,
    )


def find_key_line(lines: Iterable[str], key: str) -> int | None:
    """Return the index of the first line naming *key*, decodable or not."""
    probe = _probe_re(key)
    for index, line in enumerate(lines):
        if probe.match(line):
            return index
    return None


def find_assignment(lines: Iterable[str], key: str) -> Assignment | None:
    """Return the first line defining *key*, decoded, or ``None``.

    Only the first line that names *key* is considered; if it cannot be
    decoded the key counts as not found. Later duplicates are ignored.
    """
    lines = list(lines)
    index = find_key_line(lines, key)
    if index is None:
        return None
    return parse_assignment(lines[index], key, index)


def iter_assignments(lines: Iterable[str]) -> Iterator[Assignment]:
    """Yield every decodable assignment line in order, duplicates included."""
    for index, line in enumerate(lines):
        m = _ANY_KEY_RE.match(line)
        if m is None:
            continue
        parsed = parse_assignment(line, m.group("key"), index)
        if parsed is not None:
            yield parsed


def cast_value(value: object, cast_booleans: bool = False) -> str:
    """Convert *value* to the text stored in the file.

    With *cast_booleans* ``True``/``False`` become ``"true"``/``"false"``;
    without it they become ``"1"``/``""``. ``None`` becomes ``""``.
    """
    if value is True:
        return "true" if cast_booleans else "1"
    if value is False:
        return "false" if cast_booleans else ""
    if value is None:
        return ""
    return str(value)


def format_value(value: str, force_quotes: bool = False) -> str:
    """Quote and escape *value* when it cannot be written bare."""
    if not force_quotes and not _NEEDS_QUOTES_RE.search(value):
        return value
    # Backslashes first, or the ones added for quotes get doubled.
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _check_single_line(what: str, text: str) -> None:
    if "\n" in text or "\r" in text:
        raise ValueError(f"{what} must fit on a single line: {text!r}")


def format_line(
    key: str,
    value: object,
    comment: str = "",
    export: bool = False,
    *,
    cast_booleans: bool = False,
) -> str:
    """Build one assignment line (no trailing newline).

    A non-empty *comment* forces double quotes around the value.
    """
    if not key:
        raise ValueError("key must not be empty")
    text = cast_value(value, cast_booleans)
    comment = comment or ""
    _check_single_line("key", key)
    _check_single_line("value", text)
    _check_single_line("comment", comment)

    prefix = "export " if export else ""
    suffix = f" # {comment}" if comment else ""
    return f"{prefix}{key}={format_value(text, force_quotes=bool(comment))}{suffix}"


def parse_env_file(path: str | Path) -> dict[str, str]:
    """Read a .env file and return an ordered dict of key-value pairs.

    The first definition of a key wins, matching :func:`find_assignment`.
    """
    text = normalize_newlines(Path(path).read_text(encoding="utf-8-sig"))
    result: dict[str, str] = {}
    for assignment in iter_assignments(text.split("\n")):
        result.setdefault(assignment.key, assignment.value)
    return result
