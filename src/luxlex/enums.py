"""Enumerations for luxlex type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class CommentStyle(StrEnum):
    """Syntax a comment was written in.

    StrEnum provides automatic string conversion: str(CommentStyle.LINE) == "line"
    """

    LINE = "line"
    """Single-line comment: ## runs to end of line"""

    BLOCK = "block"
    """Block comment, may nest: #( outer #( inner )# )#"""


class Delimiter(StrEnum):
    """Opening delimiters of structural forms and block comments."""

    LIST = "("
    TUPLE = "["
    RECORD = "{"
    BLOCK_COMMENT = "#("

    @property
    def closing(self) -> str:
        """Matching closing delimiter."""
        return _CLOSING[self]


_CLOSING: dict[Delimiter, str] = {
    Delimiter.LIST: ")",
    Delimiter.TUPLE: "]",
    Delimiter.RECORD: "}",
    Delimiter.BLOCK_COMMENT: ")#",
}


__all__ = [
    "CommentStyle",
    "Delimiter",
]
