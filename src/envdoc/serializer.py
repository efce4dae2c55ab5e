"""Write key/value documents back out as dotenv text."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
    "\r": "\\r",
}


def quote_value(value: str) -> str:
    """Quote *value* so that parsing it gives back the same string.

    Multi-line values without apostrophes are single-quoted verbatim;
    everything else is double-quoted with backslash escapes.
    """
    if "\n" in value and "'" not in value:
        return f"'{value}'"
    return '"' + "".join(_ESCAPES.get(c, c) for c in value) + '"'


def _split_entry(entry: Any) -> tuple[str | None, str]:
    if isinstance(entry, Mapping):
        description = entry.get("description")
        value = entry.get("value")
        return (str(description) if description else None, "" if value is None else str(value))
    return None, str(entry)


def serialize(document: Mapping[str, Any]) -> str:
    """Render *document* as dotenv text, one entry per line.

    Entries may be plain values or ``{"description": ..., "value": ...}``
    mappings; a description is written as ``#`` comment lines above its key.
    """
    entries: list[str] = []
    for key, entry in document.items():
        description, value = _split_entry(entry)
        lines = [f"# {line}" for line in description.split("\n")] if description else []
        lines.append(f"{key}={quote_value(value)}")
        entries.append("\n".join(lines))
    return "\n".join(entries)
