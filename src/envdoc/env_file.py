"""Read and write .env files through the dotenv grammar.

Files are read without newline translation. A file whose every line break
is ``\\r\\n`` is treated as a Windows file and folded to ``\\n``; any other
file is parsed as-is, so a ``\\r`` kept inside a quoted value survives a
write and a read.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from envdoc.parser import AnyDocument, Document, parse
from envdoc.serializer import serialize


def read_env_text(path: str | Path) -> str:
    """Return the text of *path* with CRLF line endings folded to LF."""
    with open(path, encoding="utf-8", newline="") as f:
        text = f.read()
    if "\n" in text and text.count("\r\n") == text.count("\n"):
        text = text.replace("\r\n", "\n")
    return text


def render_env_text(document: Mapping[str, Any]) -> str:
    """Serialize *document* as file content: one trailing newline, none when empty."""
    text = serialize(document)
    return text + "\n" if text else ""


def read_env_file(path: str | Path, extract_descriptions: bool = False) -> AnyDocument:
    """Parse the .env file at *path*."""
    return parse(read_env_text(path), extract_descriptions=extract_descriptions)


def parse_env_file(path: str | Path) -> Document:
    """Read a .env file and return an ordered dict of key-value pairs."""
    return parse(read_env_text(path))


def write_env_file(path: str | Path, document: Mapping[str, Any]) -> None:
    """Serialize *document* to *path*, creating parent directories as needed."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", encoding="utf-8", newline="") as f:
        f.write(render_env_text(document))
