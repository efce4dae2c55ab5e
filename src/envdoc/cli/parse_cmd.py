"""``envdoc parse`` command."""

from __future__ import annotations

import json
from pathlib import Path

import click
import yaml

from envdoc.cli import _config, _load_document, _resolve_path, _sorted, cli, console
from envdoc.config import OUTPUT_FORMATS
from envdoc.parser import AnyDocument
from envdoc.serializer import serialize


def format_document(document: AnyDocument, fmt: str) -> str:
    """Render *document* as json, yaml or dotenv text (no trailing newline)."""
    if fmt == "json":
        return json.dumps(document, indent=2, ensure_ascii=False)
    if fmt == "yaml":
        return yaml.safe_dump(
            document, default_flow_style=False, sort_keys=False, allow_unicode=True,
        ).rstrip("\n")
    return serialize(document)


@cli.command("parse")
@click.argument("path", required=False, type=click.Path(dir_okay=False))
@click.option(
    "--descriptions/--no-descriptions", "-D", default=None,
    help="Include comment descriptions with each value (default: from config).",
)
@click.option(
    "--format", "fmt",
    type=click.Choice(OUTPUT_FORMATS),
    default=None,
    help="Output format: json (default), yaml, or dotenv.",
)
@click.option("--sort/--no-sort", "sort_keys", default=None, help="Sort keys alphabetically (default: from config).")
@click.option(
    "--output", "-o",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Output file path (default: stdout).",
)
@click.pass_context
def parse_file(
    ctx: click.Context,
    path: str | None,
    descriptions: bool | None,
    fmt: str | None,
    sort_keys: bool | None,
    output: str | None,
) -> None:
    """Parse a .env file and print its entries.

    PATH defaults to the configured env_file (``.env``). With --descriptions
    every entry becomes {"description": ..., "value": ...}, where the
    description is the block of # comment lines right above the key.
    """
    cfg = _config(ctx)
    path = _resolve_path(ctx, path)
    extract = cfg.extract_descriptions if descriptions is None else descriptions
    document = _load_document(ctx, path, extract)
    if sort_keys or (sort_keys is None and cfg.sort_keys):
        document = _sorted(document)

    rendered = format_document(document, fmt or cfg.format)
    if output:
        Path(output).write_text(rendered + "\n", encoding="utf-8")
        console.print(f"[green]Wrote {len(document)} entr{'y' if len(document) == 1 else 'ies'} to {output}[/green]")
    else:
        click.echo(rendered)
