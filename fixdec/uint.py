"""Checked 128-bit unsigned integer for digit accumulation.

Python ints never overflow, so the accumulator width that the value type
relies on has to be enforced explicitly. U128 wraps an int and checks every
result against [0, U128_MAX]:
- Results above U128_MAX raise U128Overflow
- Negative results raise U128Overflow

Usage pattern:
    from fixdec.uint import U128

    acc = U128.zero()
    for digit in b"12345":
        acc = acc.push_digit(digit - 0x30)  # Raises past 2^128-1

    magnitude = acc.value
"""

from __future__ import annotations

from fixdec.constants import U128_MAX


class U128Overflow(ArithmeticError):
    """Value left the unsigned 128-bit range."""

    pass


class U128:
    """Unsigned 128-bit integer with checked arithmetic.

    Only the operations the digit accumulator needs are provided: checked
    addition and multiplication, equality and conversion back to int.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | U128) -> None:
        """Create a U128 from an integer or another U128.

        Raises:
            TypeError: If value is not an int or U128
            U128Overflow: If value is outside [0, U128_MAX]
        """
        if isinstance(value, U128):
            self._value = value._value
            return
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"U128 requires int, got {type(value).__name__}")
        self._value = _check(value)

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"U128({self._value})"

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: U128 | int) -> U128:
        """Add two values.

        Raises:
            U128Overflow: If the sum leaves the u128 range
        """
        return U128(_check(self._value + _extract_value(other)))

    def __mul__(self, other: U128 | int) -> U128:
        """Multiply two values.

        Raises:
            U128Overflow: If the product leaves the u128 range
        """
        return U128(_check(self._value * _extract_value(other)))

    # --- Equality ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, U128):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def push_digit(self, digit: int) -> U128:
        """Shift one decimal digit in: self * 10 + digit.

        Raises:
            ValueError: If digit is not in 0..9
            U128Overflow: If the result leaves the u128 range
        """
        if not 0 <= digit <= 9:
            raise ValueError(f"Not a decimal digit: {digit}")
        return self * 10 + digit

    @classmethod
    def zero(cls) -> U128:
        """Create a U128 with value 0."""
        return cls(0)


def _check(value: int) -> int:
    """Return value if it fits in u128, raise U128Overflow otherwise."""
    if value < 0:
        raise U128Overflow(f"Negative value cannot be u128: {value}")
    if value > U128_MAX:
        raise U128Overflow(f"Value exceeds u128 max: {value}")
    return value


def _extract_value(x: U128 | int) -> int:
    """Extract integer value from U128 or int."""
    if isinstance(x, U128):
        return x._value
    return x


__all__ = ["U128", "U128Overflow"]
