"""Shared constants for luxlex.

Centralized configuration constants used by the lexer and diagnostics.
Placing constants here avoids circular imports and provides a single
source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for structural forms and block comments
- Input limits: DoS prevention via size constraints
- Diagnostics: Bounds on text echoed back in error messages

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    "FRAMES_PER_LEVEL",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Diagnostics
    "SNIPPET_LENGTH",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================
#
# Lists, tuples, records and block comments are lexed by genuine recursion:
# every nesting level re-enters the form-sequence lexer. The limit below
# applies to the combined nesting of all four constructs, so "([{#( )#}])"
# is depth 4.
#
# Each nesting level costs several interpreter frames (choice, sequencing,
# repetition and the structural lexer itself). FRAMES_PER_LEVEL is the
# measured upper bound used when clamping a requested depth against
# sys.getrecursionlimit().

# Maximum nesting depth for structural forms and block comments.
MAX_DEPTH: int = 100

# Upper bound of interpreter frames consumed per nesting level.
FRAMES_PER_LEVEL: int = 8

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in characters (10 MB of ASCII source).
# Prevents DoS attacks via unbounded memory allocation from large inputs.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# DIAGNOSTICS
# ============================================================================

# Maximum number of characters of remaining input quoted in a failure message.
SNIPPET_LENGTH: int = 40
