# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""envwriter CLI -- read and patch .env files from the shell.

The CLI is split into per-command modules under this package.  The ``cli``
click group and shared helpers (``console``, ``_open_document``,
``library_errors``, etc.) live here so every command module can import them.
"""

from __future__ import annotations

import dataclasses
import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager

import click
from rich.console import Console
from rich.logging import RichHandler

from envwriter import __version__
from envwriter.config import EnvWriterConfig, load_config
from envwriter.document import LINE_ENDINGS, EnvDocument
from envwriter.environ import NullEnvironmentSink
from envwriter.errors import EnvWriterError

try:
    import yaml
    HAS_YAML = True
except ImportError:
    HAS_YAML = False

console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

@contextmanager
def library_errors() -> Iterator[None]:
    """Turn envwriter errors into click errors so the CLI exits cleanly."""
    try:
        yield
    except (EnvWriterError, ValueError) as e:
        raise click.ClickException(str(e))


def _config(ctx: click.Context) -> EnvWriterConfig:
    cfg: EnvWriterConfig = ctx.obj["config"]
    if ctx.obj.get("line_ending"):
        cfg = dataclasses.replace(cfg, line_ending=ctx.obj["line_ending"])
    return cfg


def _open_document(ctx: click.Context, *, writable: bool = False) -> EnvDocument:
    """Open the current env file.

    Writable documents need a writable (or creatable) file and start empty
    when it does not exist yet; read-only ones need the file to exist.
    """
    cfg = _config(ctx)
    path = ctx.obj["path"]
    with library_errors():
        if writable:
            return cfg.open_document(path)
        doc = EnvDocument(
            line_ending=cfg.line_ending,
            cast_booleans=cfg.cast_booleans,
            environ=NullEnvironmentSink(),
        )
        return doc.load(path)


def _mask(value: str) -> str:
    if len(value) <= 6:
        return "****"
    return value[:3] + "****" + value[-3:]


# ---------------------------------------------------------------------------
# Top-level click group
# ---------------------------------------------------------------------------

@click.group()
@click.option(
    "--file", "-f", "path", default=None,
    help="Path to the .env file (default: ENVWRITER_FILE env var, config, else .env).",
)
@click.option(
    "--line-ending", type=click.Choice(sorted(LINE_ENDINGS)), default=None,
    help="Line ending for written files (default: detected from the file).",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.version_option(__version__)
@click.pass_context
def cli(
    ctx: click.Context,
    path: str | None,
    line_ending: str | None,
    verbose: bool,
) -> None:
    """Edit .env files in place, keeping comments, order and quoting."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )
    cfg = load_config()
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg
    ctx.obj["path"] = path or os.environ.get("ENVWRITER_FILE") or cfg.env_file
    ctx.obj["line_ending"] = line_ending


# ---------------------------------------------------------------------------
# Register all command modules (import triggers @cli.command registration)
# ---------------------------------------------------------------------------

from envwriter.cli import (  # noqa: E402, F401
    crud_cmd,
    list_cmd,
    export_cmd,
)
