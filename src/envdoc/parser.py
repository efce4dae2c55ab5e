"""Build key/value documents from dotenv source."""

from __future__ import annotations

from typing import Literal, TypedDict, Union, overload

from envdoc.extract import Token
from envdoc.lexer import lex


class EnvEntry(TypedDict):
    """A value together with the comment lines written above it."""

    description: str | None
    value: str


Document = dict[str, str]
DescribedDocument = dict[str, EnvEntry]
AnyDocument = Union[Document, DescribedDocument]


def decode_string(token: Token) -> str:
    """Return the literal payload of a ``String`` alternative."""
    if token.name == "UnquotedString":
        return token.text
    if token.name == "EmptyString":
        return ""
    # quoted forms capture [open quote, body, close quote]
    if len(token.elements) != 3:
        return ""
    body = token.elements[1]
    if isinstance(body, Token):
        return body.text
    return ""


def _comment_text(token: Token) -> str:
    chars = token.find("CommentChars")
    return chars.text.strip() if chars is not None else ""


def _entry(token: Token) -> tuple[str, str]:
    key = token.find("Key")
    value = token.elements[2] if len(token.elements) > 2 else None
    return (
        key.text if key is not None else "",
        decode_string(value) if isinstance(value, Token) else "",
    )


@overload
def parse(source: str, extract_descriptions: Literal[False] = ...) -> Document: ...


@overload
def parse(source: str, extract_descriptions: Literal[True]) -> DescribedDocument: ...


@overload
def parse(source: str, extract_descriptions: bool) -> AnyDocument: ...


def parse(source: str, extract_descriptions: bool = False) -> AnyDocument:
    """Parse dotenv *source* into a mapping of key to value.

    Consecutive ``#`` comment lines directly above an entry form its
    description. With *extract_descriptions* each value is returned as an
    :class:`EnvEntry` carrying that description (``None`` when there was
    none). When a key is assigned twice the later assignment wins.

    Raises :class:`~envdoc.lexer.DotEnvSyntaxError` on the first character
    that no rule can consume; no partial document is returned.
    """
    document: dict = {}
    description = ""
    for token in lex(source):
        if token.name == "Comment":
            if description:
                description += "\n"
            description += _comment_text(token)
        elif token.name == "KeyedEntry":
            key, value = _entry(token)
            if extract_descriptions:
                document[key] = EnvEntry(description=description or None, value=value)
            else:
                document[key] = value
            description = ""
    return document
