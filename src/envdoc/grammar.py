"""Declarative grammar for dotenv text.

A grammar is a read-only mapping of rule name to rule. Rules come in four
shapes:

  - ``Literal``      exact text
  - ``CharClass``    one character matching a regex class
  - ``Sequence``     ordered parts: literals, char classes and ``Ref`` entries
  - ``Alternation``  ordered choice between named rules

A ``Ref`` inside a sequence names another rule and carries two flags:
``optional`` (a failure ends the sequence early instead of failing it) and
``flatten`` (splice the sub-rule's elements into the parent capture).
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from envdoc.extract import Token

Elements = list[Union["Token", str]]
Transform = Callable[[Elements], Elements]


class GrammarError(ValueError):
    """Raised when a grammar table refers to rules it does not define."""


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class CharClass:
    pattern: re.Pattern[str]

    @classmethod
    def of(cls, regex: str) -> CharClass:
        return cls(re.compile(regex))

    def matches(self, char: str) -> bool:
        return bool(char) and self.pattern.fullmatch(char) is not None


@dataclass(frozen=True)
class Ref:
    name: str
    optional: bool = False
    flatten: bool = False


@dataclass(frozen=True)
class Sequence:
    parts: tuple[Literal | CharClass | Ref, ...]
    transform: Transform | None = None


@dataclass(frozen=True)
class Alternation:
    choices: tuple[str, ...]


Rule = Union[Literal, CharClass, Sequence, Alternation]
Grammar = Mapping[str, Rule]


_ESCAPES = {
    "\\\\": "\\",
    "\\n": "\n",
    "\\t": "\t",
    "\\b": "\b",
    "\\f": "\f",
    "\\r": "\r",
    '\\"': '"',
}


def unescape(elements: Elements) -> Elements:
    """Decode a backslash escape pair captured as its first element."""
    if elements and isinstance(elements[0], str):
        elements = [_ESCAPES.get(elements[0], elements[0]), *elements[1:]]
    return elements


def _seq(*parts: Literal | CharClass | Ref, transform: Transform | None = None) -> Sequence:
    return Sequence(tuple(parts), transform)


def _many(name: str, item: str) -> Sequence:
    """``name = item^ name?^``: one or more *item*, flattened into one run."""
    return _seq(Ref(item, flatten=True), Ref(name, optional=True, flatten=True))


def validate_grammar(grammar: Grammar) -> None:
    """Check every reference in *grammar* resolves to a defined rule."""
    for name, rule in grammar.items():
        if isinstance(rule, Alternation):
            targets = list(rule.choices)
        elif isinstance(rule, Sequence):
            targets = []
            for part in rule.parts:
                if isinstance(part, Ref):
                    targets.append(part.name)
                elif not isinstance(part, (Literal, CharClass)):
                    raise GrammarError(f"Rule {name!r} has unsupported part {part!r}")
        elif isinstance(rule, (Literal, CharClass)):
            targets = []
        else:
            raise GrammarError(f"Rule {name!r} has unsupported shape {rule!r}")
        for target in targets:
            if target not in grammar:
                raise GrammarError(f"Rule {name!r} refers to unknown rule {target!r}")


DOTENV_GRAMMAR: Grammar = MappingProxyType({
    # ECMAScript whitespace; unlike Python's \s it excludes the \x1c-\x1f separators and \x85
    "Whitespace": _seq(
        CharClass.of(r"[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]"),
        Ref("Whitespace", optional=True, flatten=True),
    ),

    # "#" followed by the rest of the line
    "Comment": _seq(Literal("#"), Ref("CommentChars", optional=True)),
    "CommentChars": _many("CommentChars", "CommentChar"),
    "CommentChar": CharClass.of(r"[^\n]"),

    "KeyedEntry": _seq(Ref("Key"), Literal("="), Ref("String", optional=True)),

    "Key": _seq(Ref("AlphaUChar", flatten=True), Ref("AlphaNumUChars", optional=True, flatten=True)),
    "AlphaNumUChars": _many("AlphaNumUChars", "AlphaNumUChar"),
    "AlphaUChar": CharClass.of(r"[a-zA-Z_]"),
    "AlphaNumUChar": CharClass.of(r"[a-zA-Z0-9_]"),

    # Order matters: an unquoted value is tried before any quoted form.
    "String": Alternation(("UnquotedString", "EmptyString", "QuotedString", "SingleQuotedString")),

    "UnquotedString": _seq(Ref("SafeChar", flatten=True), Ref("UnquotedStringChars", optional=True, flatten=True)),
    # quotes are reserved as the first character of quoted strings
    "SafeChar": CharClass.of(r"""[^\n"']"""),
    "UnquotedStringChars": _seq(CharClass.of(r"[^\\\n]"), Ref("UnquotedStringChars", optional=True, flatten=True)),

    # QuotedString stops at its optional body when that is empty, so "" gets its own rule.
    "EmptyString": Literal('""'),
    "QuotedString": _seq(Literal('"'), Ref("QuotedStringChars", optional=True), Literal('"')),
    "QuotedStringChars": _many("QuotedStringChars", "QuotedStringChar"),
    "QuotedStringChar": Alternation(("UnescapedQuotedStringChar", "EscapedChars")),
    "UnescapedQuotedStringChar": CharClass.of(r'[^\\"]'),
    "EscapedChars": _seq(Literal("\\"), CharClass.of(r'[ntbfr"\\]'), transform=unescape),

    "SingleQuotedString": _seq(Literal("'"), Ref("SingleQuotedStringChars", optional=True), Literal("'")),
    "SingleQuotedStringChars": _many("SingleQuotedStringChars", "SingleQuotedStringChar"),
    "SingleQuotedStringChar": Alternation(("UnescapedSingleQuotedStringChar",)),
    "UnescapedSingleQuotedStringChar": CharClass.of(r"[^']"),
})

TOP_LEVEL_RULES: tuple[str, ...] = ("Whitespace", "Comment", "KeyedEntry")

validate_grammar(DOTENV_GRAMMAR)
