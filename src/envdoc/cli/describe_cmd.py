"""``envdoc describe`` command."""

from __future__ import annotations

import sys

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from envdoc.cli import _config, _load_document, _resolve_path, _sorted, cli


@cli.command("describe")
@click.argument("path", required=False, type=click.Path(dir_okay=False))
@click.option("--sort/--no-sort", "sort_keys", default=None, help="Sort keys alphabetically (default: from config).")
@click.option("--show-values/--hide-values", default=True, help="Include values in the table.")
@click.pass_context
def describe(ctx: click.Context, path: str | None, sort_keys: bool | None, show_values: bool) -> None:
    """Show each key with the documentation comment written above it."""
    cfg = _config(ctx)
    path = _resolve_path(ctx, path)
    document = _load_document(ctx, path, extract_descriptions=True)
    if sort_keys or (sort_keys is None and cfg.sort_keys):
        document = _sorted(document)

    table = Table(title=Text(f"Variables ({path})"))
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Description", style="white")
    if show_values:
        table.add_column("Value", style="dim")
    if not document:
        table.add_row("(empty)", "", *([""] if show_values else []))
    for key, entry in document.items():
        row = [Text(key), Text(entry["description"] or "")]
        if show_values:
            row.append(Text(entry["value"]))
        table.add_row(*row)

    out = Console(file=sys.stdout, highlight=False)
    out.print(table)
