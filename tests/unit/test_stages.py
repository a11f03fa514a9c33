"""Tests for the individual parsing stages."""

import pytest

from fixdec.errors import InvalidFormat, Overflow
from fixdec.parsing import (
    Parts,
    Sign,
    accumulate_digits,
    eat_digits,
    eat_whitespace,
    extract_exponent,
    extract_nan,
    extract_sign,
    parse_mantissa,
    parse_prefix,
    trim_whitespace,
    validate_bounds,
)
from fixdec.uint import U128Overflow


class TestWhitespace:
    """Tests for eat_whitespace and trim_whitespace."""

    def test_eat_leading(self):
        """Only leading whitespace is removed."""
        assert eat_whitespace(b" \t\n\r\x0c1 ") == b"1 "

    def test_eat_all(self):
        """All-whitespace input becomes empty."""
        assert eat_whitespace(b"   ") == b""

    def test_trim_both_ends(self):
        """trim_whitespace strips both ends."""
        assert trim_whitespace(b"\t 1 2 \n") == b"1 2"

    def test_vertical_tab_kept(self):
        """Vertical tab is not ASCII whitespace here."""
        assert trim_whitespace(b"\x0b1\x0b") == b"\x0b1\x0b"


class TestExtractNan:
    """Tests for extract_nan."""

    @pytest.mark.parametrize("s", [b"nan", b"NaN", b"NAN", b"nAN"])
    def test_match(self, s):
        """Any case matches and is consumed."""
        assert extract_nan(s + b"rest") == (True, b"rest")

    def test_no_match(self):
        """Other input is returned unchanged."""
        assert extract_nan(b"na1") == (False, b"na1")

    def test_too_short(self):
        """Fewer than three bytes never match."""
        assert extract_nan(b"na") == (False, b"na")


class TestExtractSign:
    """Tests for extract_sign."""

    def test_plus(self):
        assert extract_sign(b"+1") == (Sign.POSITIVE, b"1")

    def test_minus(self):
        assert extract_sign(b"-1") == (Sign.NEGATIVE, b"1")

    def test_absent(self):
        """No sign defaults to positive and consumes nothing."""
        assert extract_sign(b"1") == (Sign.POSITIVE, b"1")

    def test_empty(self):
        assert extract_sign(b"") == (Sign.POSITIVE, b"")

    def test_only_one_sign(self):
        """A second sign is left for the next stage."""
        assert extract_sign(b"--1") == (Sign.NEGATIVE, b"-1")


class TestEatDigits:
    """Tests for eat_digits."""

    def test_run(self):
        assert eat_digits(b"0123x45") == (b"0123", b"x45")

    def test_empty_run(self):
        """A zero-length run is not an error."""
        assert eat_digits(b".5") == (b"", b".5")

    def test_all_digits(self):
        assert eat_digits(b"9876543210") == (b"9876543210", b"")

    def test_non_ascii_digits_stop(self):
        """Only ASCII 0-9 count as digits."""
        assert eat_digits("12٣".encode()) == (b"12", "٣".encode())


class TestExtractExponent:
    """Tests for extract_exponent."""

    def test_unsigned(self):
        assert extract_exponent(b"12rest") == (12, b"rest")

    def test_signed(self):
        assert extract_exponent(b"+7") == (7, b"")
        assert extract_exponent(b"-7") == (-7, b"")

    def test_leading_zeros(self):
        """Leading zeros are stripped before the digit cap."""
        assert extract_exponent(b"-0000000130") == (-130, b"")

    def test_all_zeros(self):
        assert extract_exponent(b"000") == (0, b"")

    def test_no_digits(self):
        """A sign without digits is invalid."""
        with pytest.raises(InvalidFormat):
            extract_exponent(b"-")
        with pytest.raises(InvalidFormat):
            extract_exponent(b"")

    def test_digit_cap(self):
        """More than three significant digits overflow."""
        with pytest.raises(Overflow):
            extract_exponent(b"1000")

    def test_range(self):
        """Exponent must lie in [-MAX_SCALE, -MIN_SCALE]."""
        assert extract_exponent(b"126")[0] == 126
        assert extract_exponent(b"-130")[0] == -130
        with pytest.raises(Overflow):
            extract_exponent(b"127")
        with pytest.raises(Overflow):
            extract_exponent(b"-131")


class TestParseMantissa:
    """Tests for parse_mantissa."""

    def test_integer(self):
        parts, rest = parse_mantissa(b"-00120 ")
        assert parts == Parts(sign=Sign.NEGATIVE, integral=b"120", fractional=b"", exp=0)
        assert rest == b" "

    def test_zero_integral_kept(self):
        """All-zero integral digits collapse to a single zero."""
        parts, _ = parse_mantissa(b"0000")
        assert parts.integral == b"0"

    def test_fraction(self):
        parts, rest = parse_mantissa(b"12.3400")
        assert parts == Parts(sign=Sign.POSITIVE, integral=b"12", fractional=b"34", exp=0)
        assert rest == b""

    def test_fraction_only(self):
        """A missing integral run is allowed before a fraction."""
        parts, _ = parse_mantissa(b".5")
        assert parts.integral == b""
        assert parts.fractional == b"5"

    def test_fraction_with_exponent(self):
        parts, rest = parse_mantissa(b"1.50E-3x")
        assert parts == Parts(sign=Sign.POSITIVE, integral=b"1", fractional=b"5", exp=-3)
        assert rest == b"x"

    def test_exponent_without_fraction(self):
        parts, _ = parse_mantissa(b"7e2")
        assert parts == Parts(sign=Sign.POSITIVE, integral=b"7", fractional=b"", exp=2)

    def test_trailing_point(self):
        parts, rest = parse_mantissa(b"7.")
        assert parts.fractional == b""
        assert rest == b""

    def test_stops_at_garbage(self):
        """Unrecognized bytes are returned as the rest."""
        parts, rest = parse_mantissa(b"7abc")
        assert parts.integral == b"7"
        assert rest == b"abc"

    @pytest.mark.parametrize("s", [b"", b"-", b"+", b".", b"-.", b"e5", b".e5", b"x", b" 1"])
    def test_invalid(self, s):
        """Inputs without mantissa digits are invalid."""
        with pytest.raises(InvalidFormat):
            parse_mantissa(s)


class TestValidateBounds:
    """Tests for validate_bounds."""

    def _parts(self, integral: bytes, fractional: bytes = b"", exp: int = 0) -> Parts:
        return Parts(sign=Sign.POSITIVE, integral=integral, fractional=fractional, exp=exp)

    def test_scale(self):
        """Scale is fraction length minus exponent."""
        assert validate_bounds(self._parts(b"1", b"25", exp=-3)) == 5
        assert validate_bounds(self._parts(b"1", b"25", exp=3)) == -1

    def test_zero_integral_not_counted(self):
        """The integral zero of 0.xxx is not a significant digit."""
        assert validate_bounds(self._parts(b"0", b"9" * 38)) == 38
        with pytest.raises(Overflow):
            validate_bounds(self._parts(b"1", b"9" * 38))

    def test_precision(self):
        validate_bounds(self._parts(b"9" * 38))
        with pytest.raises(Overflow):
            validate_bounds(self._parts(b"9" * 39))

    def test_scale_range(self):
        validate_bounds(self._parts(b"1", b"1", exp=-129))
        with pytest.raises(Overflow):
            validate_bounds(self._parts(b"1", b"1", exp=-130))
        validate_bounds(self._parts(b"1", exp=126))
        with pytest.raises(Overflow):
            validate_bounds(self._parts(b"1", exp=127))


class TestAccumulateDigits:
    """Tests for accumulate_digits."""

    def test_integral_then_fraction(self):
        parts = Parts(sign=Sign.POSITIVE, integral=b"128", fractional=b"128", exp=0)
        assert accumulate_digits(parts) == 128128

    def test_zero(self):
        parts = Parts(sign=Sign.NEGATIVE, integral=b"0", fractional=b"", exp=0)
        assert accumulate_digits(parts) == 0

    def test_max_precision_fits(self):
        parts = Parts(sign=Sign.POSITIVE, integral=b"9" * 38, fractional=b"", exp=0)
        assert accumulate_digits(parts) == 10**38 - 1

    def test_unvalidated_overflow_is_caught(self):
        """Skipping validate_bounds cannot silently exceed 128 bits."""
        parts = Parts(sign=Sign.POSITIVE, integral=b"9" * 39, fractional=b"", exp=0)
        with pytest.raises(U128Overflow):
            accumulate_digits(parts)


class TestParsePrefix:
    """Tests for parse_prefix."""

    def test_returns_rest(self):
        """Trailing bytes are returned, not rejected."""
        value, rest = parse_prefix(b"-1.5e1;next")
        assert value.as_tuple() == (15, 0, True)
        assert rest == b";next"

    def test_no_whitespace_skipping(self):
        with pytest.raises(InvalidFormat):
            parse_prefix(b" 1")

    def test_canonical_zero(self):
        value, _ = parse_prefix(b"-0.000")
        assert value.negative is False
