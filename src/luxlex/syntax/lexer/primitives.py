"""Primitive token lexers for the Lux lexer.

This module provides the leaf lexers: booleans, numbers, identifiers,
tags, char and string literals (with escape decoding) and line comments.
Each is a Parser built from :mod:`luxlex.syntax.combinators` and produces
one token with its span.

Overlap Between Families:
    Lexeme families overlap textually ("1.5" starts with an int, "true"
    and "-" are identifier-shaped), so the composite form lexer tries
    them in a fixed priority order: boolean, float, int, char, string,
    identifier, tag. Booleans additionally require that no identifier
    character follows, so "falsey" is one identifier rather than a
    boolean followed by "y".
"""

import re

from luxlex.diagnostics import ErrorTemplate
from luxlex.enums import CommentStyle
from luxlex.syntax.combinators import (
    between,
    close_delimiter,
    commit,
    fail,
    located,
    literal,
    ordered_choice,
    pattern,
    preceded_by,
    repeat_zero_or_more,
    sequence,
    transform,
)
from luxlex.syntax.cursor import Cursor, ParseFailure, ParseOutcome, ParseResult
from luxlex.syntax.tokens import (
    Boolean,
    Char,
    Comment,
    Float,
    Ident,
    Int,
    Span,
    String,
    Tag,
)

__all__ = [
    "decode_escape",
    "is_boolean",
    "is_float",
    "is_identifier",
    "is_int",
    "is_tag_name",
    "lex_boolean",
    "lex_char",
    "lex_escape",
    "lex_float",
    "lex_ident",
    "lex_int",
    "lex_line_comment",
    "lex_string",
    "lex_tag",
    "string_body",
]

# Punctuation allowed anywhere in an identifier, in addition to ASCII letters.
_IDENT_PUNCTUATION: str = "-+_=!@$%^&*<>.,/\\|':~?"

_IDENT_START_CLASS = "[a-zA-Z" + re.escape(_IDENT_PUNCTUATION) + "]"
_IDENT_CHAR_CLASS = "[0-9a-zA-Z" + re.escape(_IDENT_PUNCTUATION) + "]"

_IDENT_RE = re.compile(_IDENT_START_CLASS + _IDENT_CHAR_CLASS + "*")
_BOOLEAN_RE = re.compile("(?:true|false)(?!" + _IDENT_CHAR_CLASS + ")")
_FLOAT_RE = re.compile(r"(?:0|[1-9][0-9]*)\.[0-9]+")
_INT_RE = re.compile(r"0|[1-9][0-9]*")

# DOTALL: a backslash followed by a newline is an (unknown) escape, and
# string bodies run across lines.
_ESCAPE_RE = re.compile(r"\\.", re.DOTALL)
_STRING_RUN_RE = re.compile(r'[^"\\]*')
_CHAR_PLAIN_RE = re.compile(r"[^\\\n]")
_LINE_COMMENT_TEXT_RE = re.compile(r"[^\n]*")
_LINE_END_RE = re.compile(r"\n?")

# Two-character escape sequences and the characters they stand for.
_ESCAPES: dict[str, str] = {
    "\\t": "\t",
    "\\b": "\b",
    "\\n": "\n",
    "\\r": "\r",
    "\\f": "\f",
    '\\"': '"',
    "\\\\": "\\",
}


# =============================================================================
# Literals
# =============================================================================

lex_boolean = located(pattern(_BOOLEAN_RE, "boolean"), Boolean)
lex_float = located(pattern(_FLOAT_RE, "float"), Float)
lex_int = located(pattern(_INT_RE, "integer"), Int)
lex_ident = located(pattern(_IDENT_RE, "identifier"), Ident)
lex_tag = located(preceded_by(literal("#"), pattern(_IDENT_RE, "identifier")), Tag)


# =============================================================================
# Escapes, strings and chars
# =============================================================================


def decode_escape(sequence: str) -> str | None:
    """Map a two-character escape sequence to the character it denotes.

    Args:
        sequence: Backslash plus one character, e.g. ``"\\\\n"``

    Returns:
        The decoded character, or None for an unknown escape

    Example:
        >>> decode_escape("\\\\t")
        '\\t'
        >>> decode_escape("\\\\x") is None
        True
    """
    return _ESCAPES.get(sequence)


def lex_escape(cursor: Cursor) -> ParseOutcome[str]:
    """Lex one escape sequence and decode it.

    Returns:
        ParseResult with the decoded character; a plain failure when the
        cursor is not at a backslash with a character after it; a
        committed UNKNOWN_ESCAPE_CHARACTER failure for any sequence
        outside the supported set
    """
    match = cursor.match(_ESCAPE_RE)
    if match is None:
        return fail(cursor, "escape sequence")
    sequence = match.group()
    decoded = decode_escape(sequence)
    if decoded is None:
        return ParseFailure(
            ErrorTemplate.unknown_escape_character(sequence), cursor, committed=True
        )
    return ParseResult(decoded, cursor.advance(len(sequence)))


_string_run = pattern(_STRING_RUN_RE, "string characters")

# Raw run immediately followed by one escape: "abc\n" → "abc" + newline
_escaped_segment = sequence(
    _string_run, lambda prefix: transform(lex_escape, lambda char: prefix + char)
)

# Body = (run escape)* run. A body segment without a following escape
# fails plainly, which ends the repetition and leaves the final run.
string_body = sequence(
    repeat_zero_or_more(_escaped_segment),
    lambda segments: transform(_string_run, lambda tail: "".join(segments) + tail),
)

lex_string = located(
    between(literal('"'), string_body, close_delimiter('"', '"')),
    String,
)

_char_value = commit(
    ordered_choice(lex_escape, pattern(_CHAR_PLAIN_RE, "character"))
)

lex_char = located(
    between(literal('#"'), _char_value, close_delimiter('#"', '"')),
    Char,
)


# =============================================================================
# Line comments
# =============================================================================


def _line_comment(text: str, span: Span) -> Comment:
    return Comment(text, CommentStyle.LINE, span)


lex_line_comment = located(
    between(
        literal("##"),
        pattern(_LINE_COMMENT_TEXT_RE, "comment text"),
        pattern(_LINE_END_RE, "line end"),
    ),
    _line_comment,
)


def is_identifier(text: str) -> bool:
    """Check whether text lexes as exactly one identifier.

    Example:
        >>> is_identifier("foo-bar!")
        True
        >>> is_identifier("true"), is_identifier("1abc")
        (False, False)
    """
    return _IDENT_RE.fullmatch(text) is not None and _BOOLEAN_RE.fullmatch(text) is None


def is_tag_name(text: str) -> bool:
    """Check whether "#" + text lexes as a Tag with this text.

    Unlike identifiers, tag names may be "true" or "false": the leading
    "#" already rules out a boolean.
    """
    return _IDENT_RE.fullmatch(text) is not None


def is_boolean(text: str) -> bool:
    """Check whether text lexes as exactly one Boolean."""
    return _BOOLEAN_RE.fullmatch(text) is not None


def is_float(text: str) -> bool:
    """Check whether text lexes as exactly one Float.

    Example:
        >>> is_float("0.5"), is_float("1."), is_float("01.5")
        (True, False, False)
    """
    return _FLOAT_RE.fullmatch(text) is not None


def is_int(text: str) -> bool:
    """Check whether text lexes as exactly one Int (no leading zeros)."""
    return _INT_RE.fullmatch(text) is not None
