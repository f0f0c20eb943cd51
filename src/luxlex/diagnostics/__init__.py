"""Diagnostic system for luxlex errors.

Provides structured error diagnostics with codes, spans, and hints.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    LuxError,
    LuxSyntaxError,
    NestingDepthExceededError,
    PatternFailureError,
    UnbalancedDelimiterError,
    UnconsumedInputError,
    UnknownEscapeCharacterError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "LuxError",
    "LuxSyntaxError",
    "NestingDepthExceededError",
    "OutputFormat",
    "PatternFailureError",
    "SourceSpan",
    "UnbalancedDelimiterError",
    "UnconsumedInputError",
    "UnknownEscapeCharacterError",
]
