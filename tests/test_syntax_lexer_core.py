"""Tests for the Lexer driver.

Covers the raising surface (lex, lex_with_comments), the non-raising
LexResult surface, comment stripping, limits and logging.
"""

from __future__ import annotations

import logging

import pytest

from luxlex.diagnostics import (
    DiagnosticCode,
    LuxSyntaxError,
    NestingDepthExceededError,
    PatternFailureError,
    UnbalancedDelimiterError,
    UnconsumedInputError,
    UnknownEscapeCharacterError,
)
from luxlex.enums import CommentStyle
from luxlex.syntax.lexer import LexResult, Lexer, strip_comments
from luxlex.syntax.tokens import (
    Boolean,
    Char,
    Comment,
    Float,
    Ident,
    Int,
    List,
    Record,
    Span,
    String,
    Tag,
    Tuple,
)

# ============================================================================
# SUCCESSFUL LEXING
# ============================================================================


class TestLexLiterals:
    """Test literal lexing through the driver."""

    @pytest.mark.parametrize(
        ("source", "token"),
        [
            ("true", Boolean("true")),
            ("42", Int("42")),
            ("3.14", Float("3.14")),
            ('"a\\nb"', String("a\nb")),
            ('#"x"', Char("x")),
            ("#ok", Tag("ok")),
        ],
    )
    def test_literal(self, lexer: Lexer, source: str, token: object) -> None:
        """Each literal lexes to one token."""
        assert lexer.lex(source) == (token,)

    @pytest.mark.parametrize("source", ["->", "foo-bar!", "a.b/c"])
    def test_identifier_boundary(self, lexer: Lexer, source: str) -> None:
        """Punctuation-heavy identifiers are single Ident tokens."""
        assert lexer.lex(source) == (Ident(source),)

    def test_digit_led_word_is_not_one_ident(self, lexer: Lexer) -> None:
        """'1abc' never lexes as a single Ident."""
        assert lexer.lex("1abc") == (Int("1"), Ident("abc"))

    def test_boolean_needs_boundary(self, lexer: Lexer) -> None:
        """'falsey' is one Ident; 'true' before ')' is a Boolean."""
        assert lexer.lex("falsey") == (Ident("falsey"),)
        assert lexer.lex("(true)") == (List((Boolean("true"),)),)

    def test_forms_in_source_order(self, lexer: Lexer) -> None:
        """N well-formed forms give N tokens in order."""
        tokens = lexer.lex("1 two [3] {} \"five\"\n#six")

        assert tokens == (
            Int("1"),
            Ident("two"),
            Tuple((Int("3"),)),
            Record(()),
            String("five"),
            Tag("six"),
        )


class TestLexStructure:
    """Test nesting and whitespace handling."""

    def test_nesting(self, lexer: Lexer) -> None:
        """'(1 2 (3 4))' builds nested lists."""
        assert lexer.lex("(1 2 (3 4))") == (
            List((Int("1"), Int("2"), List((Int("3"), Int("4"))))),
        )

    @pytest.mark.parametrize("source", ["", "   ", "\n\n"])
    def test_blank_source(self, lexer: Lexer, source: str) -> None:
        """Blank input is an empty token tuple."""
        assert lexer.lex(source) == ()

    def test_spaces_inside_delimiters(self, lexer: Lexer) -> None:
        """'( )' is an empty list."""
        assert lexer.lex("( )") == (List(()),)

    def test_spans(self, lexer: Lexer) -> None:
        """Tokens carry character offsets into the source."""
        tokens = lexer.lex("  42")

        assert tokens[0].span == Span(2, 4)


# ============================================================================
# COMMENTS
# ============================================================================


class TestComments:
    """Test comment handling."""

    def test_line_comment_stripped(self, lexer: Lexer) -> None:
        """'1 ## comment\\n2' keeps only the integers."""
        assert lexer.lex("1 ## comment\n2") == (Int("1"), Int("2"))

    def test_nested_block_comment_stripped(self, lexer: Lexer) -> None:
        """A nested block comment disappears entirely."""
        assert lexer.lex("#(outer #(inner)# still)#1") == (Int("1"),)

    def test_comments_stripped_at_every_depth(self, lexer: Lexer) -> None:
        """Comments inside structural forms are removed as well."""
        tokens = lexer.lex("(a ## note\n [b #(x)# c])")

        assert tokens == (List((Ident("a"), Tuple((Ident("b"), Ident("c"))))),)

    def test_lex_with_comments(self, lexer: Lexer) -> None:
        """lex_with_comments keeps Comment tokens in place."""
        tokens = lexer.lex_with_comments("1 #(b)# (## l\n)")

        assert tokens == (
            Int("1"),
            Comment("b", CommentStyle.BLOCK),
            List((Comment(" l", CommentStyle.LINE),)),
        )

    def test_strip_comments_keeps_spans(self, lexer: Lexer) -> None:
        """Rebuilt structural tokens keep their original span."""
        tokens = lexer.lex_with_comments("(1 ## x\n)")
        stripped = strip_comments(tokens)

        assert stripped == (List((Int("1"),)),)
        assert stripped[0].span == tokens[0].span == Span(0, 9)


# ============================================================================
# FAILURES
# ============================================================================


class TestLexErrors:
    """Test the exception raised for each failure kind."""

    def test_unknown_escape(self, lexer: Lexer) -> None:
        """An unknown escape inside a string raises UnknownEscapeCharacterError."""
        with pytest.raises(UnknownEscapeCharacterError) as exc_info:
            lexer.lex('"a\\xb"')

        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.code is DiagnosticCode.UNKNOWN_ESCAPE_CHARACTER
        assert diagnostic.span is not None
        assert diagnostic.span.start == 2

    def test_unbalanced_block_comment(self, lexer: Lexer) -> None:
        """'#(abc' raises UnbalancedDelimiterError."""
        with pytest.raises(UnbalancedDelimiterError):
            lexer.lex("#(abc")

    def test_unbalanced_list(self, lexer: Lexer) -> None:
        """'(1 2' raises UnbalancedDelimiterError, a PatternFailureError."""
        with pytest.raises(PatternFailureError) as exc_info:
            lexer.lex("(1 2")

        assert isinstance(exc_info.value, UnbalancedDelimiterError)

    def test_wrong_close(self, lexer: Lexer) -> None:
        """'(1 ]' raises a plain PatternFailureError."""
        with pytest.raises(PatternFailureError) as exc_info:
            lexer.lex("(1 ]")

        assert type(exc_info.value) is PatternFailureError
        assert "Expected ')'" in str(exc_info.value)

    def test_unconsumed_input(self, lexer: Lexer) -> None:
        """A lone ')' raises UnconsumedInputError."""
        with pytest.raises(UnconsumedInputError) as exc_info:
            lexer.lex(")")

        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.span is not None
        assert (diagnostic.span.start, diagnostic.span.end) == (0, 1)

    def test_unconsumed_after_forms(self, lexer: Lexer) -> None:
        """Trailing garbage after valid forms is reported at its position."""
        with pytest.raises(UnconsumedInputError) as exc_info:
            lexer.lex("(a b)\n  } c")

        span = exc_info.value.diagnostic.span
        assert (span.line, span.column) == (2, 3)

    def test_nesting_depth(self) -> None:
        """Nesting beyond the limit raises NestingDepthExceededError."""
        lexer = Lexer(max_nesting_depth=5)

        assert lexer.lex("(((((x)))))")
        with pytest.raises(NestingDepthExceededError):
            lexer.lex("((((((x))))))")

    def test_default_depth_limit(self, lexer: Lexer) -> None:
        """101 nested lists exceed the default limit of 100."""
        with pytest.raises(NestingDepthExceededError):
            lexer.lex("(" * 101 + ")" * 101)

    @pytest.mark.parametrize(
        "source", ['"a\\xb"', "#(abc", "(1 2", "(1 ]", ")", "((((((((x"]
    )
    def test_all_errors_are_syntax_errors(self, source: str) -> None:
        """Every lex failure is a LuxSyntaxError."""
        with pytest.raises(LuxSyntaxError):
            Lexer(max_nesting_depth=4).lex(source)

    def test_error_message_is_formatted(self, lexer: Lexer) -> None:
        """str(error) is the Rust-style rendering of the diagnostic."""
        with pytest.raises(UnbalancedDelimiterError) as exc_info:
            lexer.lex("(1")

        text = str(exc_info.value)
        assert text.startswith("error[UNBALANCED_DELIMITER]: Unclosed '(' at end of input")
        assert "--> line 1, column 3" in text


# ============================================================================
# NON-RAISING SURFACE
# ============================================================================


class TestLexResult:
    """Test lex_result and LexResult."""

    def test_success(self, lexer: Lexer) -> None:
        """A clean lex has tokens and no diagnostic."""
        result = lexer.lex_result("(a)")

        assert result.is_ok
        assert result.diagnostic is None
        assert result.unwrap() == (List((Ident("a"),)),)

    def test_failure(self, lexer: Lexer) -> None:
        """A failed lex has no tokens and a spanned diagnostic."""
        result = lexer.lex_result("(1 2")

        assert not result.is_ok
        assert result.tokens == ()
        assert result.diagnostic is not None
        assert result.diagnostic.code is DiagnosticCode.UNBALANCED_DELIMITER
        assert result.diagnostic.span is not None

    def test_unwrap_raises_matching_error(self) -> None:
        """unwrap() raises the exception matching the diagnostic code."""
        result = Lexer().lex_result(")")

        with pytest.raises(UnconsumedInputError):
            result.unwrap()

    def test_keep_comments(self, lexer: Lexer) -> None:
        """keep_comments=True returns Comment tokens."""
        result = lexer.lex_result("## hi", keep_comments=True)

        assert result.tokens == (Comment(" hi"),)

    def test_is_frozen(self) -> None:
        """LexResult is immutable."""
        result = LexResult(())

        with pytest.raises(AttributeError):
            result.tokens = (Int("1"),)  # type: ignore[misc]


# ============================================================================
# CONFIGURATION AND LOGGING
# ============================================================================


class TestLexerConfiguration:
    """Test limits and their logging."""

    def test_defaults(self, lexer: Lexer) -> None:
        """Default limits come from luxlex.constants."""
        assert lexer.max_source_size == 10 * 1024 * 1024
        assert lexer.max_nesting_depth == 100

    def test_source_too_large(self) -> None:
        """Oversized source is rejected before lexing."""
        lexer = Lexer(max_source_size=10)

        with pytest.raises(ValueError, match="exceeds maximum"):
            lexer.lex("1 2 3 4 5 6")

    def test_size_limit_disabled(self) -> None:
        """max_source_size=0 disables the check."""
        lexer = Lexer(max_source_size=0)

        assert len(lexer.lex("1 " * 1000)) == 1000

    def test_depth_clamped_with_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        """An impossible depth is clamped and a warning logged."""
        with caplog.at_level(logging.WARNING, logger="luxlex.core.depth"):
            lexer = Lexer(max_nesting_depth=1_000_000)

        assert lexer.max_nesting_depth < 1_000_000
        assert any("Clamping" in record.message for record in caplog.records)

    def test_failure_logged_at_debug(
        self, lexer: Lexer, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Failures are logged at DEBUG level only."""
        with caplog.at_level(logging.DEBUG, logger="luxlex.syntax.lexer.core"):
            lexer.lex_result(")")

        assert [r.levelno for r in caplog.records] == [logging.DEBUG]
        assert "Unconsumed input" in caplog.records[0].getMessage()

    def test_lexer_reusable(self, lexer: Lexer) -> None:
        """A failed lex does not affect later calls."""
        lexer.lex_result("(")

        assert lexer.lex("1") == (Int("1"),)


class TestCommentGuard:
    """Test Comment.guard."""

    def test_guard(self, lexer: Lexer) -> None:
        """guard() picks Comment tokens out of a mixed sequence."""
        tokens = lexer.lex_with_comments("1 ## a\n#(b)# x")

        assert [t.text for t in tokens if Comment.guard(t)] == [" a", "b"]
        assert not Comment.guard(Int("1"))
