# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``envwriter list`` command."""

from __future__ import annotations

import click
from rich.table import Table

from envwriter.cli import _mask, _open_document, cli, console


@cli.command("list")
@click.option("--reveal", is_flag=True, help="Show values unmasked.")
@click.pass_context
def list_keys(ctx: click.Context, reveal: bool) -> None:
    """List the variables defined in the file."""
    doc = _open_document(ctx)
    keys = doc.keys()
    if not keys:
        console.print("[yellow]No variables defined.[/yellow]")
        return

    table = Table(title=f"Variables ({ctx.obj['path']})")
    table.add_column("Key", style="white")
    table.add_column("Value" if reveal else "Value (masked)", style="dim")
    table.add_column("Export", style="cyan")
    table.add_column("Comment", style="dim")
    for key in keys:
        match = doc.get(key)
        if match is None:
            table.add_row(key, "(unparsable)", "", "")
            continue
        value = match.value if reveal else (_mask(match.value) if match.value else "(empty)")
        table.add_row(key, value, "yes" if match.export else "", match.comment)
    console.print(table)
