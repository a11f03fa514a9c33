"""Bounds shared by the decimal value type and its text parser.

MAX_PRECISION and the accumulator width are one paired constant: every
integer with MAX_PRECISION decimal digits must fit in ACCUMULATOR_BITS bits.
Both are checked together at import time.
"""

# Maximum number of significant decimal digits in the unscaled magnitude
MAX_PRECISION = 38

# Scale range (digits right of the decimal point; negative means trailing zeros)
MAX_SCALE = 130
MIN_SCALE = -126

# Digit accumulator width
ACCUMULATOR_BITS = 128
U128_MAX = 2**ACCUMULATOR_BITS - 1

# Exponent magnitude is capped structurally before any range check
MAX_EXPONENT_DIGITS = 3


def _validate_precision_pairing(precision: int, bits: int) -> int:
    """Validate that `precision` digits always fit in `bits` bits.

    Args:
        precision: Maximum number of decimal digits
        bits: Width of the unsigned accumulator

    Returns:
        The validated precision

    Raises:
        ValueError: If the largest `precision`-digit integer overflows
    """
    if 10**precision - 1 > 2**bits - 1:
        raise ValueError(
            f"MAX_PRECISION={precision} does not fit a {bits}-bit accumulator"
        )
    return precision


_validate_precision_pairing(MAX_PRECISION, ACCUMULATOR_BITS)

__all__ = [
    "MAX_PRECISION",
    "MAX_SCALE",
    "MIN_SCALE",
    "ACCUMULATOR_BITS",
    "U128_MAX",
    "MAX_EXPONENT_DIGITS",
]
