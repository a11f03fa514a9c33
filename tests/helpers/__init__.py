"""Test helpers module for shared test utilities.

- literals: Tables of decimal literals and their expected outcomes
"""

from tests.helpers.literals import (
    EMPTY_LITERALS,
    INVALID_LITERALS,
    OVERFLOW_LITERALS,
    VALID_LITERALS,
    digits,
)

__all__ = [
    "VALID_LITERALS",
    "EMPTY_LITERALS",
    "INVALID_LITERALS",
    "OVERFLOW_LITERALS",
    "digits",
]
