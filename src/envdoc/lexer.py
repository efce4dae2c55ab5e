"""Split dotenv source into top-level tokens."""

from __future__ import annotations

from collections.abc import Iterator

from envdoc.extract import Extractor, Token
from envdoc.grammar import DOTENV_GRAMMAR, TOP_LEVEL_RULES, Grammar

PREVIEW_LENGTH = 25


class DotEnvSyntaxError(ValueError):
    """Source text does not match the grammar at ``offset``."""

    def __init__(self, source: str, offset: int) -> None:
        self.offset = offset
        self.char = source[offset:offset + 1]
        self.preview = source[offset:offset + PREVIEW_LENGTH].split("\n")[0]
        self.line = source.count("\n", 0, offset) + 1
        self.column = offset - (source.rfind("\n", 0, offset) + 1) + 1
        self.line_text = _line_at(source, offset)
        if self.char:
            what = f"Unexpected token {self.char!r}"
        else:
            what = "Unexpected end of input"
        super().__init__(
            f"{what}, at char {offset} (line {self.line}, column {self.column}: {self.preview!r})"
        )


def _line_at(source: str, offset: int) -> str:
    start = source.rfind("\n", 0, offset) + 1
    end = source.find("\n", offset)
    return source[start:] if end == -1 else source[start:end]


def lex(
    source: str,
    grammar: Grammar = DOTENV_GRAMMAR,
    rules: tuple[str, ...] = TOP_LEVEL_RULES,
) -> Iterator[Token]:
    """Yield top-level tokens until *source* is consumed.

    Every pass tries each of *rules* in turn from the running offset. A pass
    that consumes nothing raises :class:`DotEnvSyntaxError` at the furthest
    offset any rule reached.
    """
    extractor = Extractor(grammar, source)
    offset = 0
    while offset < len(source):
        start = offset
        extractor.furthest = start
        for name in rules:
            found = extractor.extract(name, offset)
            if found is None:
                continue
            token, offset = found
            yield token

        if offset == start:
            raise DotEnvSyntaxError(source, extractor.furthest)
