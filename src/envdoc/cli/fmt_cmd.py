"""``envdoc fmt`` command."""

from __future__ import annotations

from pathlib import Path

import click

from envdoc.cli import _config, _load_document, _resolve_path, _sorted, cli, console
from envdoc.env_file import render_env_text, write_env_file


@cli.command("fmt")
@click.argument("path", required=False, type=click.Path(dir_okay=False))
@click.option("--write", "-w", is_flag=True, help="Rewrite the file in place instead of printing.")
@click.option("--sort/--no-sort", "sort_keys", default=None, help="Sort keys alphabetically (default: from config).")
@click.pass_context
def fmt(ctx: click.Context, path: str | None, write: bool, sort_keys: bool | None) -> None:
    """Print a .env file in canonical form.

    Comments directly above a key are kept as its description; other comments
    and blank lines are dropped, and every value is re-quoted. Duplicate keys
    collapse to their last assignment.
    """
    cfg = _config(ctx)
    path = _resolve_path(ctx, path)
    document = _load_document(ctx, path, extract_descriptions=True)
    if sort_keys or (sort_keys is None and cfg.sort_keys):
        document = _sorted(document)

    if not write:
        click.echo(render_env_text(document), nl=False)
        return

    if Path(path).read_bytes() == render_env_text(document).encode("utf-8"):
        console.print(f"[dim]{path} already formatted.[/dim]")
        return
    write_env_file(path, document)
    console.print(f"[green]Formatted {path}[/green]")
