"""Decimal text parsing.

Turns a decimal literal into a FixedDecimal in a single forward pass over
the input bytes:

    trim -> reject NaN -> sign -> mantissa (digits, fraction, exponent)
         -> precision/scale bounds -> digit accumulation -> trailing check

Grammar (D = ASCII digit):

    decimal_literal := WS* sign? mantissa WS*
    sign            := '+' | '-'
    mantissa        := integer ('.' fraction?)? exponent?
                      | '.' fraction exponent?
    integer         := D+
    fraction        := D+
    exponent        := ('e'|'E') sign? D+

Each stage takes the unconsumed bytes and returns its result together with
the remainder. Digit runs are bytes slices, i.e. owned copies, so no
intermediate result refers back to the caller's buffer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import structlog

from fixdec.config import DEFAULT_PARSE_CONFIG, ParseConfig
from fixdec.constants import MAX_EXPONENT_DIGITS, MAX_SCALE, MIN_SCALE
from fixdec.errors import DecimalParseError, EmptyInput, InvalidFormat, Overflow
from fixdec.uint import U128
from fixdec.value import FixedDecimal

logger = structlog.get_logger()

# ASCII whitespace: space, \t, \n, \f, \r (vertical tab is not included)
WHITESPACE = b" \t\n\x0c\r"

_DIGITS = frozenset(b"0123456789")
_ZERO = ord("0")
_EXPONENT_MARKERS = (b"e", b"E")


class Sign(Enum):
    """Sign of a literal. Carries no magnitude."""

    POSITIVE = "+"
    NEGATIVE = "-"


@dataclass(frozen=True)
class Parts:
    """The interesting parts of a decimal literal.

    Attributes:
        sign: Leading sign, POSITIVE when absent
        integral: Integral digits without leading zeros ("0" kept as b"0")
        fractional: Fractional digits without trailing zeros
        exp: Exponent value, 0 when absent
    """

    sign: Sign
    integral: bytes
    fractional: bytes
    exp: int


# =============================================================================
# Lexical stages
# =============================================================================


def eat_whitespace(s: bytes) -> bytes:
    """Strip leading ASCII whitespace."""
    return s.lstrip(WHITESPACE)


def trim_whitespace(s: bytes) -> bytes:
    """Strip ASCII whitespace from both ends."""
    return s.strip(WHITESPACE)


def extract_nan(s: bytes) -> tuple[bool, bytes]:
    """Detect a leading, case-insensitive "nan" token.

    Returns:
        (True, rest after the token) on a match, (False, s) otherwise
    """
    if len(s) >= 3 and s[:3].lower() == b"nan":
        return True, s[3:]
    return False, s


def extract_sign(s: bytes) -> tuple[Sign, bytes]:
    """Split off one optional leading '+' or '-'. The rest is not inspected."""
    head = s[:1]
    if head == b"+":
        return Sign.POSITIVE, s[1:]
    if head == b"-":
        return Sign.NEGATIVE, s[1:]
    return Sign.POSITIVE, s


def eat_digits(s: bytes) -> tuple[bytes, bytes]:
    """Carve off ASCII digits up to the first non-digit byte.

    Returns:
        (digit run, rest). The run may be empty; the caller decides whether
        that is an error.
    """
    i = 0
    while i < len(s) and s[i] in _DIGITS:
        i += 1
    return s[:i], s[i:]


# =============================================================================
# Grammar stages
# =============================================================================


def extract_exponent(s: bytes) -> tuple[int, bytes]:
    """Parse the exponent that follows an 'e'/'E' marker.

    Args:
        s: Bytes right after the marker

    Returns:
        (exponent, rest)

    Raises:
        InvalidFormat: If no digits follow the optional sign
        Overflow: If the exponent has more than 3 significant digits, or
            would push the scale past MIN_SCALE / MAX_SCALE on its own.
            Narrower configured bounds are left to validate_bounds
    """
    sign, s = extract_sign(s)
    number, s = eat_digits(s)

    if not number:
        raise InvalidFormat("exponent has no digits")

    number = number.lstrip(b"0")
    if len(number) > MAX_EXPONENT_DIGITS:
        raise Overflow(f"exponent has more than {MAX_EXPONENT_DIGITS} digits")

    exp = 0
    for digit in number:
        exp = exp * 10 + (digit - _ZERO)
    if sign is Sign.NEGATIVE:
        exp = -exp

    if exp > -MIN_SCALE or exp < -MAX_SCALE:
        raise Overflow(f"exponent {exp} out of range")

    return exp, s


def parse_mantissa(s: bytes) -> tuple[Parts, bytes]:
    """Locate sign, integral digits, fractional digits and exponent.

    Leading zeros of the integral run and trailing zeros of the fractional
    run are dropped here, so later stages only count significant digits.

    Returns:
        (normalized parts, unconsumed rest)

    Raises:
        InvalidFormat: If the input does not start with a valid mantissa
        Overflow: Propagated from extract_exponent
    """
    sign, s = extract_sign(s)

    if not s:
        raise InvalidFormat("missing digits after sign")

    integral, s = eat_digits(s)
    # "000" -> "0", "" stays ""
    integral = integral.lstrip(b"0") or integral[:1]

    head = s[:1]
    if head in _EXPONENT_MARKERS:
        if not integral:
            raise InvalidFormat("exponent without mantissa digits")
        exp, s = extract_exponent(s[1:])
        fractional = b""
    elif head == b".":
        fractional, s = eat_digits(s[1:])
        if not integral and not fractional:
            raise InvalidFormat("decimal point without digits")
        fractional = fractional.rstrip(b"0")
        if s[:1] in _EXPONENT_MARKERS:
            exp, s = extract_exponent(s[1:])
        else:
            exp = 0
    else:
        if not integral:
            raise InvalidFormat("missing digits")
        fractional = b""
        exp = 0

    return Parts(sign=sign, integral=integral, fractional=fractional, exp=exp), s


# =============================================================================
# Validation and construction
# =============================================================================


def validate_bounds(parts: Parts, config: ParseConfig = DEFAULT_PARSE_CONFIG) -> int:
    """Check precision and scale of normalized parts.

    The single integral zero of "0.xxx" is not a significant digit.

    Returns:
        The scale of the resulting value

    Raises:
        Overflow: If precision > config.max_precision or the scale is
            outside [config.min_scale, config.max_scale]
    """
    if parts.integral == b"0":
        precision = len(parts.fractional)
    else:
        precision = len(parts.integral) + len(parts.fractional)

    if precision > config.max_precision:
        raise Overflow(f"precision {precision} exceeds {config.max_precision}")

    scale = len(parts.fractional) - parts.exp
    if scale > config.max_scale or scale < config.min_scale:
        raise Overflow(f"scale {scale} outside [{config.min_scale}, {config.max_scale}]")

    return scale


def accumulate_digits(parts: Parts) -> int:
    """Fold integral then fractional digits into the unscaled magnitude.

    Raises:
        U128Overflow: Only if called on parts that skipped validate_bounds
    """
    acc = U128.zero()
    for digit in parts.integral + parts.fractional:
        acc = acc.push_digit(digit - _ZERO)
    return acc.value


def parse_prefix(
    s: bytes, config: ParseConfig = DEFAULT_PARSE_CONFIG
) -> tuple[FixedDecimal, bytes]:
    """Parse a decimal at the start of s.

    Does not skip leading whitespace and does not special-case NaN. The
    unconsumed rest is returned so the caller can decide what trailing
    bytes are acceptable.

    Raises:
        InvalidFormat: If s does not start with a valid literal
        Overflow: If the literal exceeds the configured bounds
    """
    parts, rest = parse_mantissa(s)
    scale = validate_bounds(parts, config)
    magnitude = accumulate_digits(parts)

    # Canonical zero: "-0", "-0.0" and "-0e5" are all plain zero
    negative = parts.sign is Sign.NEGATIVE and magnitude != 0

    return FixedDecimal._from_parts_unchecked(magnitude, scale, negative), rest


def _parse_bytes(data: bytes, config: ParseConfig) -> FixedDecimal:
    s = trim_whitespace(data)
    if not s:
        raise EmptyInput("empty decimal")

    is_nan, s = extract_nan(s)
    if is_nan:
        raise InvalidFormat("NaN is not a decimal value")

    value, rest = parse_prefix(s, config)

    if eat_whitespace(rest):
        raise InvalidFormat("unexpected characters after number")

    return value


def parse(text: str | bytes, config: ParseConfig = DEFAULT_PARSE_CONFIG) -> FixedDecimal:
    """Parse decimal text into a FixedDecimal.

    Leading and trailing ASCII whitespace is ignored. NaN and infinity
    literals are rejected.

    Args:
        text: Literal as str (encoded to UTF-8) or bytes
        config: Precision and scale bounds (default: the value type's own)

    Returns:
        The parsed value

    Raises:
        EmptyInput: If text is empty or only whitespace
        InvalidFormat: If text is not a decimal literal
        Overflow: If the literal exceeds the configured bounds
        TypeError: If text is neither str nor bytes-like

    Examples:
        parse("128.128")  -> magnitude=128128, scale=3
        parse("-1e-10")   -> magnitude=1, scale=10, negative
        parse(" -0.0 ")   -> canonical zero
    """
    if isinstance(text, str):
        data = text.encode("utf-8", "replace")
    elif isinstance(text, (bytes, bytearray, memoryview)):
        data = bytes(text)
    else:
        raise TypeError(f"parse requires str or bytes, got {type(text).__name__}")

    try:
        return _parse_bytes(data, config)
    except DecimalParseError as exc:
        exc.text = text if isinstance(text, str) else data.decode("utf-8", "replace")
        logger.debug(
            "decimal_parse_rejected",
            reason=exc.kind.value,
            detail=str(exc),
            text=exc.text,
        )
        raise


__all__ = [
    "Sign",
    "Parts",
    "WHITESPACE",
    "eat_whitespace",
    "trim_whitespace",
    "extract_nan",
    "extract_sign",
    "eat_digits",
    "extract_exponent",
    "parse_mantissa",
    "validate_bounds",
    "accumulate_digits",
    "parse_prefix",
    "parse",
]
