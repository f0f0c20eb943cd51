"""luxlex - Lexer for the Lux language.

Turns Lux source text into a tree of tokens: literals, identifiers, tags,
and nested lists, tuples and records. Built on a small parser-combinator
core over an immutable cursor; failures are values until the driver,
which either raises a typed exception or returns a LexResult.

Public API:
    Lexer - Configurable lexer (size and nesting limits)
    LexResult - Non-raising lex outcome with diagnostic
    lex - Lex source to tokens
    serialize - Write tokens back to source

Exceptions:
    LuxError - Base exception class
    LuxSyntaxError - Lexing failed (subclasses name the cause)

Submodules:
    luxlex.syntax.tokens - Token types (Int, String, List, ...)
    luxlex.syntax.combinators - Combinator core
    luxlex.diagnostics - Diagnostic codes, templates and formatting
"""

from .diagnostics import (
    LuxError,
    LuxSyntaxError,
    NestingDepthExceededError,
    PatternFailureError,
    UnbalancedDelimiterError,
    UnconsumedInputError,
    UnknownEscapeCharacterError,
)
from .syntax import LexResult, Lexer, lex, serialize

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("luxlex")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "LexResult",
    "Lexer",
    "LuxError",
    "LuxSyntaxError",
    "NestingDepthExceededError",
    "PatternFailureError",
    "UnbalancedDelimiterError",
    "UnconsumedInputError",
    "UnknownEscapeCharacterError",
    "__version__",
    "lex",
    "serialize",
]
