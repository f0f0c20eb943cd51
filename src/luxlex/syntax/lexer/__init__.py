"""Lux lexer module.

This module provides the Lexer class and the rules it is built from,
organized into focused submodules.

Module Organization:
- core.py: Lexer driver, LexResult and comment stripping
- primitives.py: Leaf lexers (booleans, numbers, identifiers, tags,
  chars, strings, escapes, line comments)
- whitespace.py: Whitespace skipping
- rules.py: Grammar with the composite, structural and block comment rules

Public API:
    Lexer: Main lexer class
    LexResult: Non-raising lex outcome
    Grammar: Rule set (advanced usage: lex a single form from a Cursor)
"""

from luxlex.syntax.lexer.core import LexResult, Lexer, strip_comments
from luxlex.syntax.lexer.rules import Grammar

__all__ = ["Grammar", "LexResult", "Lexer", "strip_comments"]
