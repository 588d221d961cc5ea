# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``envwriter export`` command."""

from __future__ import annotations

import json
from pathlib import Path

import click

from envwriter.cli import HAS_YAML, _open_document, cli, console
from envwriter.env_file import format_line

if HAS_YAML:
    import yaml


@cli.command("export")
@click.option(
    "--format", "fmt",
    type=click.Choice(["dotenv", "unix", "win", "json", "yaml"]),
    default="dotenv",
    help="Output format: dotenv (default, KEY=value), unix (export KEY=value), win (PowerShell), json, yaml.",
)
@click.option(
    "--output", "-o",
    type=click.Path(exists=False),
    default=None,
    help="Output file path (default: stdout).",
)
@click.pass_context
def export(ctx: click.Context, fmt: str, output: str | None) -> None:
    """Export the file's variables to stdout or another file.

    Default format is dotenv: plain KEY=value lines with comments and layout
    dropped. Use --format unix for shell sourcing:
    eval "$(envwriter export --format unix)". Use --format win for
    PowerShell: envwriter export --format win | Invoke-Expression (or iex).
    """
    pairs = _open_document(ctx).to_dict()

    if fmt == "yaml" and not HAS_YAML:
        console.print("[red]PyYAML is not installed. Install with: pip install pyyaml[/red]")
        return

    if fmt == "json":
        text = json.dumps(pairs, indent=2) + "\n"
    elif fmt == "yaml":
        text = yaml.dump(pairs, default_flow_style=False, sort_keys=False)
    else:
        text = "".join(line + "\n" for line in _format_export_lines(pairs, fmt))

    if output:
        Path(output).write_text(text)
        console.print(f"[green]Exported {len(pairs)} variable(s) to {output}[/green]")
    else:
        click.echo(text, nl=False)


def _shell_escape(value: str) -> str:
    """Escape for Unix sh: single-quote wrapped, internal ' -> '\\''."""
    if not value or any(c in value for c in " \t'\"\\$`!#&|;(){}"):
        return "'" + value.replace("'", "'\\''") + "'"
    return value


def _powershell_escape(value: str) -> str:
    """Escape for PowerShell single-quoted string: ' -> ''."""
    return value.replace("'", "''")


def _format_export_lines(pairs: dict[str, str], fmt: str) -> list[str]:
    lines: list[str] = []
    for key, value in pairs.items():
        if fmt == "unix":
            lines.append(f"export {key}={_shell_escape(value)}")
        elif fmt == "win":
            lines.append(f"$env:{key} = '{_powershell_escape(value)}'")
        else:
            lines.append(format_line(key, value))
    return lines
