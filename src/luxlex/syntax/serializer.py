"""Serialize tokens back to Lux source text.

Converts token trees to source code. Useful for:
- Formatters and code generators that build token trees programmatically
- Property-based testing (roundtrip: lex → serialize → lex)

Output is canonical rather than faithful: forms are separated by single
spaces, and special characters in chars and strings are always escaped.

Python 3.13+.
"""

from collections.abc import Callable
from typing import assert_never

from luxlex.constants import MAX_DEPTH
from luxlex.enums import CommentStyle

from .lexer.primitives import (
    is_boolean,
    is_float,
    is_identifier,
    is_int,
    is_tag_name,
)
from .tokens import (
    Boolean,
    Char,
    Comment,
    Float,
    Ident,
    Int,
    List,
    Record,
    String,
    Tag,
    Token,
    Tuple,
)

__all__ = [
    "SerializationDepthError",
    "SerializationValidationError",
    "TokenSerializer",
    "serialize",
]

# Characters written as two-character escapes inside chars and strings.
_ESCAPE_OUT: dict[str, str] = {
    "\t": "\\t",
    "\b": "\\b",
    "\n": "\\n",
    "\r": "\\r",
    "\f": "\\f",
    '"': '\\"',
    "\\": "\\\\",
}


class SerializationValidationError(ValueError):
    """Raised when a token cannot be written as source that lexes back to it.

    Common causes:
    - Boolean, Float or Int text that is not a single lexeme of that kind
    - Ident text that is not a valid identifier (or is "true"/"false")
    - Tag text that is not identifier-shaped
    - Char text that is not exactly one character
    - Block comment text with unbalanced #( )# delimiters
    """


class SerializationDepthError(ValueError):
    """Raised when a token tree nests deeper than the serializer allows."""


def _escape(text: str) -> str:
    return "".join(_ESCAPE_OUT.get(char, char) for char in text)


def _block_comment_balanced(text: str) -> bool:
    """Check that #( and )# pair up inside block comment text."""
    depth = 0
    i = 0
    while i < len(text) - 1:
        pair = text[i : i + 2]
        if pair == "#(":
            depth += 1
            i += 2
        elif pair == ")#":
            depth -= 1
            if depth < 0:
                return False
            i += 2
        else:
            i += 1
    return depth == 0


class TokenSerializer:
    """Token tree to source text converter.

    Attributes:
        max_depth: Maximum structural nesting accepted before raising
    """

    __slots__ = ("_max_depth",)

    def __init__(self, max_depth: int = MAX_DEPTH) -> None:
        self._max_depth = max_depth

    def serialize(self, tokens: tuple[Token, ...], *, validate: bool = False) -> str:
        """Serialize a token sequence.

        Args:
            tokens: Tokens to write, in order
            validate: Check that every token can round-trip through the lexer

        Returns:
            Source text

        Raises:
            SerializationValidationError: If validate=True and a token is invalid
            SerializationDepthError: If nesting exceeds max_depth
        """
        output: list[str] = []
        self._serialize_sequence(tokens, output, validate, 0)
        return "".join(output)

    def _serialize_sequence(
        self,
        tokens: tuple[Token, ...],
        output: list[str],
        validate: bool,
        depth: int,
    ) -> None:
        for i, token in enumerate(tokens):
            if i > 0:
                output.append(" ")
            self._serialize_token(token, output, validate, depth)

    def _serialize_token(  # noqa: PLR0912 - one branch per token type
        self,
        token: Token,
        output: list[str],
        validate: bool,
        depth: int,
    ) -> None:
        match token:
            case Boolean() | Float() | Int():
                if validate and not _LEXEME_CHECKS[type(token)](token.text):
                    kind = type(token).__name__
                    msg = f"Invalid {kind} text: {token.text!r}"
                    raise SerializationValidationError(msg)
                output.append(token.text)
            case Ident():
                if validate and not is_identifier(token.text):
                    msg = f"Invalid identifier text: {token.text!r}"
                    raise SerializationValidationError(msg)
                output.append(token.text)
            case Tag():
                if validate and not is_tag_name(token.text):
                    msg = f"Invalid tag text: {token.text!r}"
                    raise SerializationValidationError(msg)
                output.append(f"#{token.text}")
            case Char():
                if validate and len(token.text) != 1:
                    msg = f"Char must hold exactly one character, got {token.text!r}"
                    raise SerializationValidationError(msg)
                output.append(f'#"{_escape(token.text)}"')
            case String():
                output.append(f'"{_escape(token.text)}"')
            case Comment():
                self._serialize_comment(token, output, validate)
            case List() | Tuple() | Record():
                if depth >= self._max_depth:
                    msg = f"Token nesting exceeds maximum depth ({self._max_depth})"
                    raise SerializationDepthError(msg)
                opening, closing = _DELIMITERS[type(token)]
                output.append(opening)
                self._serialize_sequence(token.members, output, validate, depth + 1)
                output.append(closing)
            case _:
                assert_never(token)

    def _serialize_comment(
        self, comment: Comment, output: list[str], validate: bool
    ) -> None:
        match comment.style:
            case CommentStyle.LINE:
                if validate and "\n" in comment.text:
                    msg = "Line comment text cannot contain a newline"
                    raise SerializationValidationError(msg)
                output.append(f"##{comment.text}\n")
            case CommentStyle.BLOCK:
                if validate and not _block_comment_balanced(comment.text):
                    msg = f"Unbalanced block comment text: {comment.text!r}"
                    raise SerializationValidationError(msg)
                output.append(f"#({comment.text})#")
            case _:
                assert_never(comment.style)


_DELIMITERS: dict[type, tuple[str, str]] = {
    List: ("(", ")"),
    Tuple: ("[", "]"),
    Record: ("{", "}"),
}

# Full-match check per literal kind whose text is written verbatim.
_LEXEME_CHECKS: dict[type, Callable[[str], bool]] = {
    Boolean: is_boolean,
    Float: is_float,
    Int: is_int,
}


def serialize(tokens: tuple[Token, ...], *, validate: bool = False) -> str:
    """Serialize tokens to Lux source text.

    Convenience function for TokenSerializer.serialize().

    Args:
        tokens: Tokens to write
        validate: If True, check tokens can round-trip (default: False)

    Returns:
        Source text

    Raises:
        SerializationValidationError: If validate=True and a token is invalid

    Example:
        >>> from luxlex.syntax import lex, serialize
        >>> serialize(lex('(print "hi\\n")'))
        '(print "hi\\\\n")'
    """
    serializer = TokenSerializer()
    return serializer.serialize(tokens, validate=validate)
