"""Lux syntax package.

Provides the lexer, token definitions, the combinator core it is built
on, and serialization back to source text.

Python 3.13+.
"""

from .cursor import Cursor, ParseFailure, ParseOutcome, ParseResult
from .lexer import Grammar, LexResult, Lexer, strip_comments
from .serializer import SerializationDepthError, SerializationValidationError, serialize
from .tokens import (
    Boolean,
    Char,
    Comment,
    Float,
    Ident,
    Int,
    List,
    Literal,
    Record,
    Span,
    String,
    Structural,
    Tag,
    Token,
    Tuple,
)

__all__ = [
    "Boolean",
    "Char",
    "Comment",
    "Cursor",
    "Float",
    "Grammar",
    "Ident",
    "Int",
    "LexResult",
    "Lexer",
    "List",
    "Literal",
    "ParseFailure",
    "ParseOutcome",
    "ParseResult",
    "Record",
    "SerializationDepthError",
    "SerializationValidationError",
    "Span",
    "String",
    "Structural",
    "Tag",
    "Token",
    "Tuple",
    "lex",
    "serialize",
    "strip_comments",
]


def lex(source: str) -> tuple[Token, ...]:
    """Lex Lux source into tokens.

    Convenience function for Lexer.lex().

    Args:
        source: Lux source code

    Returns:
        Tokens in source order, comments removed

    Raises:
        LuxSyntaxError: If the source does not lex completely

    Example:
        >>> from luxlex.syntax import lex
        >>> lex("(1 2 (3 4))")[0].members[2]
        List(members=(Int(text='3'), Int(text='4')))
    """
    lexer = Lexer()
    return lexer.lex(source)
