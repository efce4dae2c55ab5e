# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""envdoc -- parse and write dotenv files, comments included."""

from __future__ import annotations

from pathlib import Path

from envdoc.env_file import parse_env_file
from envdoc.lexer import DotEnvSyntaxError
from envdoc.parser import EnvEntry, parse
from envdoc.serializer import serialize

__all__ = [
    "__version__",
    "DotEnvSyntaxError",
    "EnvEntry",
    "dotenv_values",
    "parse",
    "serialize",
]
__version__ = "0.1.0"


def dotenv_values(path: str | Path = ".env") -> dict[str, str]:
    """Return the values of the .env file at *path* (python-dotenv style).

    A missing file gives an empty dict.
    """
    p = Path(path)
    if not p.is_file():
        return {}
    return parse_env_file(p)
