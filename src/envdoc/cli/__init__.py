# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""envdoc CLI -- inspect, validate and reformat .env files.

The CLI is split into per-command modules under this package.  The ``cli``
click group and shared helpers (``console``, ``_load_document``, etc.) live
here so every command module can import them.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import IO, Any

import click
from rich.console import Console
from rich.text import Text

from envdoc import __version__
from envdoc.config import EnvdocConfig, load_config
from envdoc.env_file import read_env_file
from envdoc.lexer import DotEnvSyntaxError
from envdoc.parser import AnyDocument

console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

class EnvSyntaxAbort(click.ClickException):
    """Report a dotenv syntax error with the offending line and a caret."""

    def __init__(self, path: str, error: DotEnvSyntaxError) -> None:
        super().__init__(str(error))
        self.path = path
        self.error = error

    def show(self, file: IO[Any] | None = None) -> None:
        render_syntax_error(self.path, self.error)


def render_syntax_error(path: str, error: DotEnvSyntaxError) -> None:
    """Print *error* as ``path:line:column`` plus the source line and a caret."""
    console.print(Text(f"{path}:{error.line}:{error.column}: {error}", style="red"), soft_wrap=True)
    console.print(Text(f"  {error.line_text}", style="white"), soft_wrap=True)
    console.print(Text("  " + " " * (error.column - 1) + "^", style="bold red"), soft_wrap=True)


def _config(ctx: click.Context) -> EnvdocConfig:
    return ctx.obj["config"]


def _resolve_path(ctx: click.Context, path: str | None) -> str:
    """Return *path* or the configured default, failing if it does not exist."""
    resolved = path or _config(ctx).env_file
    if not Path(resolved).is_file():
        raise click.UsageError(f"File not found: {resolved}")
    return resolved


def _load_document(ctx: click.Context, path: str, extract_descriptions: bool) -> AnyDocument:
    """Parse the file at *path*, turning syntax errors into a CLI failure."""
    try:
        document = read_env_file(path, extract_descriptions=extract_descriptions)
    except DotEnvSyntaxError as e:
        raise EnvSyntaxAbort(path, e)
    _verbose(ctx, f"Read {len(document)} entr{'y' if len(document) == 1 else 'ies'} from {path}")
    return document


def _sorted(document: AnyDocument) -> AnyDocument:
    return dict(sorted(document.items()))


def _verbose(ctx: click.Context, message: str) -> None:
    if ctx.obj.get("verbose"):
        console.print(Text(message, style="dim"))


# ---------------------------------------------------------------------------
# Top-level click group
# ---------------------------------------------------------------------------

@click.group()
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="Path to .envdoc.toml (default: search upward from cwd).")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.version_option(__version__)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """Parse, check and reformat .env files, comments included."""
    try:
        cfg = load_config(Path(config_path) if config_path else None)
    except (OSError, ValueError) as e:
        raise click.UsageError(f"Could not load config: {e}")
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg
    ctx.obj["verbose"] = verbose or bool(os.environ.get("ENVDOC_VERBOSE"))
    if cfg.config_path is not None:
        _verbose(ctx, f"Using config {cfg.config_path}")


# ---------------------------------------------------------------------------
# Register all command modules (import triggers @cli.command registration)
# ---------------------------------------------------------------------------

from envdoc.cli import (  # noqa: E402, F401
    check_cmd,
    describe_cmd,
    fmt_cmd,
    parse_cmd,
)
