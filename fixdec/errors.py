"""Decimal parse error classes.

The taxonomy is flat: every failure is exactly one of empty input, invalid
format or overflow. All of them are ValueErrors so generic validation code
(including pydantic) handles them without special casing.
"""

from __future__ import annotations

from enum import Enum


class ParseErrorKind(Enum):
    """Types of decimal parse failures."""

    EMPTY = "empty"
    INVALID = "invalid"
    OVERFLOW = "overflow"


class DecimalParseError(ValueError):
    """Base error for decimal text parsing.

    Attributes:
        kind: Which of the three failure classes this is
        text: The input that was rejected, if known
    """

    kind: ParseErrorKind

    def __init__(self, message: str, text: str | None = None) -> None:
        super().__init__(message)
        self.text = text


class EmptyInput(DecimalParseError):
    """Input is empty or only whitespace."""

    kind = ParseErrorKind.EMPTY


class InvalidFormat(DecimalParseError):
    """Input does not match the decimal literal grammar."""

    kind = ParseErrorKind.INVALID


class Overflow(DecimalParseError):
    """Precision, scale or exponent exceeds its bound."""

    kind = ParseErrorKind.OVERFLOW


__all__ = [
    "ParseErrorKind",
    "DecimalParseError",
    "EmptyInput",
    "InvalidFormat",
    "Overflow",
]
