""".envdoc.toml configuration loading.

Searches upward from cwd for ``.envdoc.toml`` and merges with environment
variables; CLI flags are applied on top by the caller.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

CONFIG_FILENAME = ".envdoc.toml"
OUTPUT_FORMATS = ("json", "yaml", "dotenv")


@dataclass
class EnvdocConfig:
    """Resolved configuration for the current invocation."""

    env_file: str = ".env"
    extract_descriptions: bool = False
    format: str = "json"
    sort_keys: bool = False
    config_path: Path | None = None


def find_config_file(start: Path | None = None) -> Path | None:
    """Walk upward from *start* (default cwd) looking for ``.envdoc.toml``."""
    cur = (start or Path.cwd()).resolve()
    while True:
        candidate = cur / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if cur.parent == cur:
            return None
        cur = cur.parent


def load_config(path: Path | None = None) -> EnvdocConfig:
    """Load and return config.  Returns defaults if no file found.

    ``ENVDOC_ENV_FILE`` and ``ENVDOC_FORMAT`` override the file's values.
    Raises ``ValueError`` for invalid TOML or an unknown output format.
    """
    if path is None:
        path = find_config_file()

    section: dict[str, Any] = {}
    if path is not None:
        raw: dict[str, Any] = tomllib.loads(path.read_text())
        section = raw.get("envdoc", {})

    fmt = os.environ.get("ENVDOC_FORMAT") or section.get("format", "json")
    if fmt not in OUTPUT_FORMATS:
        raise ValueError(f"Unknown output format {fmt!r}. Use one of: {', '.join(OUTPUT_FORMATS)}")

    return EnvdocConfig(
        env_file=os.environ.get("ENVDOC_ENV_FILE") or section.get("env_file", ".env"),
        extract_descriptions=bool(section.get("extract_descriptions", False)),
        format=fmt,
        sort_keys=bool(section.get("sort_keys", False)),
        config_path=path,
    )
