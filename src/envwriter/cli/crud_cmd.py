# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``envwriter get``, ``envwriter set``, ``envwriter line`` commands."""

from __future__ import annotations

import json

import click

from envwriter.cli import _open_document, cli, console, library_errors


@cli.command()
@click.argument("key")
@click.option("--json", "as_json", is_flag=True, help="Print the whole assignment (value, comment, export) as JSON.")
@click.pass_context
def get(ctx: click.Context, key: str, as_json: bool) -> None:
    """Get a single value."""
    doc = _open_document(ctx)
    match = doc.get(key)
    if match is None:
        raise click.ClickException(f"Key '{key}' not found.")
    if as_json:
        click.echo(json.dumps(
            {
                "key": match.key,
                "value": match.value,
                "comment": match.comment,
                "export": match.export,
                "line": match.index + 1,
            },
            indent=2,
        ))
    else:
        click.echo(match.value)


@cli.command("set")
@click.argument("key")
@click.argument("value")
@click.option("--comment", "-c", default=None, help='Trailing comment. Omit to keep the current one, "" to remove it.')
@click.option("--export/--no-export", "export", default=None, help="Add or remove the export prefix (default: keep).")
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the result here instead of back to the source file.",
)
@click.pass_context
def set_key(
    ctx: click.Context,
    key: str,
    value: str,
    comment: str | None,
    export: bool | None,
    output: str | None,
) -> None:
    """Add or update a single variable, keeping the rest of the file as is."""
    doc = _open_document(ctx, writable=True)
    with library_errors():
        existed = key in doc
        doc.set(key, value, comment=comment, export=export).save(output)
    verb = "Updated" if existed else "Added"
    console.print(f"[green]{verb} {key}[/green]")


@cli.command()
@click.argument("texts", nargs=-1)
@click.pass_context
def line(ctx: click.Context, texts: tuple[str, ...]) -> None:
    """Append raw lines, e.g. a comment; no TEXT appends a blank separator.

    Blank lines at the end of the file are trimmed on save, so pass the
    separator and what follows it together: envwriter line "" "# section".
    """
    doc = _open_document(ctx, writable=True)
    with library_errors():
        for text in texts or ("",):
            doc.line(text)
        doc.save()
    console.print(f"[green]Appended {max(len(texts), 1)} line(s)[/green]")
