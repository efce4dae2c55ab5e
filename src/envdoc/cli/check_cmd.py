"""``envdoc check`` command."""

from __future__ import annotations

from pathlib import Path

import click

from envdoc.cli import _config, _verbose, cli, console, render_syntax_error
from envdoc.lexer import DotEnvSyntaxError
from envdoc.env_file import read_env_file


@cli.command("check")
@click.argument("paths", nargs=-1, type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def check(ctx: click.Context, paths: tuple[str, ...]) -> None:
    """Validate one or more .env files.

    Reports every file that does not parse, with the line, column and a caret
    under the first character no rule could consume. Exits with status 1 if
    any file fails.
    """
    if not paths:
        default = _config(ctx).env_file
        if not Path(default).is_file():
            raise click.UsageError(f"File not found: {default}")
        paths = (default,)

    failed = 0
    for path in paths:
        try:
            document = read_env_file(path)
        except DotEnvSyntaxError as e:
            render_syntax_error(path, e)
            failed += 1
            continue
        _verbose(ctx, f"{path}: {len(document)} key(s)")

    if failed:
        console.print(f"[red]{failed} of {len(paths)} file(s) failed.[/red]")
        ctx.exit(1)
    console.print(f"[green]{len(paths)} file(s) OK.[/green]")
