"""Whitespace handling for the Lux lexer.

Whitespace separates forms but never becomes a token. It is skipped
opportunistically: once before a sequence of forms and after each form.
"""

import re

from luxlex.syntax.combinators import optional, pattern

__all__ = ["lex_whitespace", "skip_whitespace"]

# Any Unicode whitespace, including newlines.
_WHITESPACE_RE = re.compile(r"\s+")

# One or more whitespace characters; fails on anything else.
lex_whitespace = pattern(_WHITESPACE_RE, "whitespace")

# Whitespace is never mandatory between or around forms.
skip_whitespace = optional(lex_whitespace)
