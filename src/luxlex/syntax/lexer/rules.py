"""Composite and recursive grammar rules for the Lux lexer.

This module provides the rules that recurse:
- The composite form lexer (one token, any family) and the form-sequence
  lexer (zero or more forms)
- Structural lexers for lists (), tuples [] and records {}, which re-enter
  the form-sequence lexer between their delimiters
- The block comment lexer #( )#, which re-enters itself for nested comments

All rules live on a Grammar instance so that the nesting limit is plain
configuration rather than global state. The current depth travels on the
Cursor; entering a structural form or block comment beyond the limit is a
committed NESTING_DEPTH_EXCEEDED failure.

Dispatch Order:
    boolean, float, int, char, string, identifier, tag,
    list, tuple, record, line comment, block comment
"""

import re
from collections.abc import Callable

from luxlex.constants import MAX_DEPTH
from luxlex.diagnostics import ErrorTemplate
from luxlex.enums import CommentStyle, Delimiter
from luxlex.syntax.combinators import (
    Parser,
    close_delimiter,
    fail,
    ordered_choice,
    pattern,
    repeat_zero_or_more,
    transform,
)
from luxlex.syntax.cursor import Cursor, ParseFailure, ParseOutcome, ParseResult
from luxlex.syntax.lexer.primitives import (
    lex_boolean,
    lex_char,
    lex_float,
    lex_ident,
    lex_int,
    lex_line_comment,
    lex_string,
    lex_tag,
)
from luxlex.syntax.lexer.whitespace import skip_whitespace
from luxlex.syntax.tokens import Comment, List, Record, Span, Structural, Token, Tuple

__all__ = ["Grammar"]

# Comment text up to (not including) the next "#(" or ")#".
_BLOCK_TEXT_RE = re.compile(r"(?:(?!#\(|\)#).)+", re.DOTALL)


def _fold_nested(comment: Comment) -> str:
    """Render a nested block comment back into its parent's text."""
    return f"#({comment.text})#"


class Grammar:
    """Form-level lexing rules bound to one nesting limit.

    Every public rule is a Parser: call it with a Cursor to get a
    ParseOutcome. Instances hold no per-call state and can be shared.

    Stack Usage:
        list_form, tuple_form, record_form and forms are written out
        rather than composed from combinators: each nesting level costs
        at most FRAMES_PER_LEVEL interpreter frames.

    Example:
        >>> grammar = Grammar()
        >>> result = grammar.forms(Cursor("(1 [2])", 0))
        >>> result.value
        (List(members=(Int(text='1'), Tuple(members=(Int(text='2'),)))),)
    """

    __slots__ = (
        "_block_body",
        "_block_close",
        "_form_choice",
        "_forms_loop",
        "_max_nesting_depth",
        "list_form",
        "record_form",
        "tuple_form",
    )

    def __init__(self, max_nesting_depth: int = MAX_DEPTH) -> None:
        """Build the grammar.

        Args:
            max_nesting_depth: Deepest allowed combined nesting of lists,
                tuples, records and block comments
        """
        self._max_nesting_depth = max_nesting_depth

        self.list_form = self._structural(Delimiter.LIST, List)
        self.tuple_form = self._structural(Delimiter.TUPLE, Tuple)
        self.record_form = self._structural(Delimiter.RECORD, Record)

        self._form_choice: Parser[Token] = ordered_choice(
            lex_boolean,
            lex_float,
            lex_int,
            lex_char,
            lex_string,
            lex_ident,
            lex_tag,
            self.list_form,
            self.tuple_form,
            self.record_form,
            lex_line_comment,
            self.block_comment,
        )
        self._forms_loop = repeat_zero_or_more(self.form)

        self._block_body = repeat_zero_or_more(
            ordered_choice(
                transform(self.block_comment, _fold_nested),
                pattern(_BLOCK_TEXT_RE, "comment text"),
            )
        )
        self._block_close = close_delimiter(
            Delimiter.BLOCK_COMMENT.value, Delimiter.BLOCK_COMMENT.closing, leave=True
        )

    @property
    def max_nesting_depth(self) -> int:
        """Deepest allowed nesting of structural forms and block comments."""
        return self._max_nesting_depth

    # =========================================================================
    # Forms
    # =========================================================================

    def form(self, cursor: Cursor) -> ParseOutcome[Token]:
        """Lex exactly one form, then skip trailing whitespace.

        Leading whitespace is skipped by forms(), once per sequence.
        """
        result = self._form_choice(cursor)
        if isinstance(result, ParseFailure):
            return result
        after = skip_whitespace(result.cursor)
        if isinstance(after, ParseFailure):
            return after
        return ParseResult(result.value, after.cursor)

    def forms(self, cursor: Cursor) -> ParseOutcome[tuple[Token, ...]]:
        """Lex zero or more forms, comments included.

        Stops without failing at the first position where no form starts,
        typically a closing delimiter or end of input. Fails only with a
        committed failure from inside a form.
        """
        leading = skip_whitespace(cursor)
        if isinstance(leading, ParseFailure):
            return leading
        return self._forms_loop(leading.cursor)

    # =========================================================================
    # Structural forms
    # =========================================================================

    def _structural(
        self,
        delimiter: Delimiter,
        build: Callable[[tuple[Token, ...], Span], Structural],
    ) -> Parser[Structural]:
        """Create the lexer for one delimited grouping."""
        opening = delimiter.value
        expected = f"'{opening}'"
        close = close_delimiter(opening, delimiter.closing, leave=True)

        def lex_structural(cursor: Cursor) -> ParseOutcome[Structural]:
            if not cursor.startswith(opening):
                return fail(cursor, expected)
            if cursor.depth >= self._max_nesting_depth:
                return self._too_deep(cursor)

            members = self.forms(cursor.advance(len(opening)).enter())
            if isinstance(members, ParseFailure):
                return members

            end = close(members.cursor)
            if isinstance(end, ParseFailure):
                return end

            span = Span(cursor.pos, end.cursor.pos)
            return ParseResult(build(members.value, span), end.cursor)

        lex_structural.__name__ = f"lex_{delimiter.name.lower()}"
        return lex_structural

    # =========================================================================
    # Block comments
    # =========================================================================

    def block_comment(self, cursor: Cursor) -> ParseOutcome[Comment]:
        """Lex a block comment, balancing nested #( )# pairs.

        The comment text is everything between the outermost delimiters;
        nested comments are kept verbatim, delimiters included.

        Example:
            "#(a #(b)# c)#" → Comment("a #(b)# c", CommentStyle.BLOCK)
        """
        opening = Delimiter.BLOCK_COMMENT.value
        if not cursor.startswith(opening):
            return fail(cursor, f"'{opening}'")
        if cursor.depth >= self._max_nesting_depth:
            return self._too_deep(cursor)

        body = self._block_body(cursor.advance(len(opening)).enter())
        if isinstance(body, ParseFailure):
            return body

        end = self._block_close(body.cursor)
        if isinstance(end, ParseFailure):
            return end

        comment = Comment(
            "".join(body.value), CommentStyle.BLOCK, Span(cursor.pos, end.cursor.pos)
        )
        return ParseResult(comment, end.cursor)

    def _too_deep(self, cursor: Cursor) -> ParseFailure:
        return ParseFailure(
            ErrorTemplate.nesting_depth_exceeded(self._max_nesting_depth),
            cursor,
            committed=True,
        )
