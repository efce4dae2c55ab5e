"""Apply grammar rules to source text.

``Extractor`` interprets the rule shapes from :mod:`envdoc.grammar` against
one source string. Extraction never mutates the source and never moves the
caller's cursor: a match returns the token together with its end offset,
a failure returns ``None``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from envdoc.grammar import (
    Alternation,
    CharClass,
    Grammar,
    GrammarError,
    Literal,
    Ref,
    Sequence,
)


@dataclass(frozen=True)
class Token:
    """A matched rule: its name and the captured elements."""

    name: str
    elements: tuple[Union[Token, str], ...]

    @property
    def text(self) -> str:
        """First captured string, or ``""`` when the token captured none."""
        for element in self.elements:
            if isinstance(element, str):
                return element
        return ""

    def find(self, name: str) -> Token | None:
        """Return the first direct sub-token named *name*."""
        for element in self.elements:
            if isinstance(element, Token) and element.name == name:
                return element
        return None


Match = tuple[Token, int]


def coalesce(elements: list[Token | str]) -> list[Token | str]:
    """Merge runs of adjacent strings into single strings."""
    merged: list[Token | str] = []
    for element in elements:
        if isinstance(element, str) and merged and isinstance(merged[-1], str):
            merged[-1] += element
        else:
            merged.append(element)
    return merged


class Extractor:
    """Match named rules of *grammar* against *source*.

    ``furthest`` is the highest offset at which a literal or character class
    failed to match; callers reset it before a round of attempts and read it
    back to locate syntax errors.
    """

    def __init__(self, grammar: Grammar, source: str) -> None:
        self.grammar = grammar
        self.source = source
        self.furthest = 0

    def extract(self, name: str, cursor: int = 0) -> Match | None:
        rule = self.grammar.get(name)
        if rule is None:
            raise GrammarError(f"Could not extract {name!r}, unknown rule")

        if isinstance(rule, Alternation):
            for choice in rule.choices:
                found = self.extract(choice, cursor)
                if found is not None:
                    return found
            return None

        if isinstance(rule, Sequence):
            return self._extract_sequence(name, rule, cursor)

        if isinstance(rule, (Literal, CharClass)):
            end = self._match_terminal(rule, cursor)
            if end is None:
                return None
            return Token(name, (self.source[cursor:end],)), end

        raise GrammarError(f"Rule {name!r} has unsupported shape {rule!r}")

    def _match_terminal(self, part: Literal | CharClass, cursor: int) -> int | None:
        if isinstance(part, Literal):
            if self.source.startswith(part.text, cursor):
                return cursor + len(part.text)
        elif part.matches(self.source[cursor:cursor + 1]):
            return cursor + 1
        if cursor > self.furthest:
            self.furthest = cursor
        return None

    def _match_parts(
        self,
        parts: tuple[Literal | CharClass | Ref, ...],
        cursor: int,
        captured: list[Token | str],
    ) -> tuple[int, bool] | None:
        """Match *parts* in order, appending to *captured*.

        Returns the end offset and whether an optional reference cut the
        sequence short, or ``None`` when a required part failed.
        """
        for part in parts:
            if isinstance(part, Ref):
                found = self.extract(part.name, cursor)
                if found is None:
                    if part.optional:
                        return cursor, True
                    return None
                token, cursor = found
                if part.flatten:
                    captured.extend(token.elements)
                else:
                    captured.append(token)
            elif isinstance(part, (Literal, CharClass)):
                end = self._match_terminal(part, cursor)
                if end is None:
                    return None
                captured.append(self.source[cursor:end])
                cursor = end
            else:
                raise GrammarError(f"Unsupported rule part {part!r}")
        return cursor, False

    def _extract_sequence(self, name: str, rule: Sequence, cursor: int) -> Match | None:
        parts = rule.parts
        tail = parts[-1] if parts else None
        # ``X = a b X?^`` repeats the body in place rather than recursing per item.
        repeats = (
            isinstance(tail, Ref)
            and tail.name == name
            and tail.flatten
            and rule.transform is None
        )
        body = parts[:-1] if repeats else parts

        captured: list[Token | str] = []
        pos = cursor
        first = True
        while True:
            mark, start = len(captured), pos
            outcome = self._match_parts(body, pos, captured)
            if outcome is None:
                if first or not tail.optional:
                    return None
                del captured[mark:]
                pos = start
                break
            pos, cut = outcome
            if cut or not repeats:
                break
            if pos == start:
                raise GrammarError(f"Rule {name!r} repeats without consuming input")
            first = False

        elements = coalesce(captured)
        if rule.transform is not None:
            elements = rule.transform(elements)
        return Token(name, tuple(elements)), pos


def extract(grammar: Grammar, name: str, source: str, cursor: int = 0) -> Match | None:
    """Match rule *name* of *grammar* at *cursor* in *source*."""
    return Extractor(grammar, source).extract(name, cursor)
