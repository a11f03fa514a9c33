"""Fixed-point decimal value.

A FixedDecimal is an unscaled unsigned magnitude, a scale and a sign flag:
value = (-1)^negative * magnitude * 10^-scale.

Invariants (checked once, by the parser or by from_parts):
- magnitude has at most MAX_PRECISION decimal digits
- scale is in [MIN_SCALE, MAX_SCALE]
- zero is never negative

Arithmetic and binary layouts are not provided here; this module only
carries the value, renders it and converts it.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from fixdec.config import DEFAULT_PARSE_CONFIG, ParseConfig
from fixdec.constants import MAX_PRECISION, MAX_SCALE, MIN_SCALE, U128_MAX
from fixdec.errors import Overflow


class FixedDecimal:
    """Exact decimal number with bounded precision and scale.

    Example: 128.128 is stored as magnitude=128128, scale=3, negative=False.
    """

    __slots__ = ("_magnitude", "_scale", "_negative")
    _magnitude: int
    _scale: int
    _negative: bool

    @classmethod
    def _from_parts_unchecked(cls, magnitude: int, scale: int, negative: bool) -> FixedDecimal:
        """Build a value from parts that were already validated.

        Only fixdec.parsing calls this. No bound is re-checked and the caller
        is responsible for canonical zero.
        """
        self = object.__new__(cls)
        self._magnitude = magnitude
        self._scale = scale
        self._negative = negative
        return self

    @classmethod
    def from_parts(cls, magnitude: int, scale: int = 0, negative: bool = False) -> FixedDecimal:
        """Create a value from its parts, validating every bound.

        Args:
            magnitude: Unscaled non-negative integer
            scale: Digits right of the decimal point
            negative: Sign flag, ignored when magnitude is zero

        Raises:
            ValueError: If magnitude is negative or not an int
            Overflow: If precision or scale is out of range
        """
        if isinstance(magnitude, bool) or not isinstance(magnitude, int):
            raise ValueError(f"magnitude must be int, got {type(magnitude).__name__}")
        if magnitude < 0:
            raise ValueError(f"magnitude must be non-negative, got {magnitude}")
        if magnitude > U128_MAX or _digit_count(magnitude) > MAX_PRECISION:
            raise Overflow(f"magnitude exceeds {MAX_PRECISION} digits: {magnitude}")
        if not MIN_SCALE <= scale <= MAX_SCALE:
            raise Overflow(f"scale {scale} outside [{MIN_SCALE}, {MAX_SCALE}]")
        return cls._from_parts_unchecked(magnitude, scale, negative and magnitude != 0)

    @classmethod
    def from_str(cls, text: str | bytes, config: ParseConfig | None = None) -> FixedDecimal:
        """Parse decimal text. See fixdec.parsing.parse."""
        from fixdec.parsing import parse

        return parse(text, config or DEFAULT_PARSE_CONFIG)

    parse = from_str

    @classmethod
    def zero(cls) -> FixedDecimal:
        """Canonical zero."""
        return cls._from_parts_unchecked(0, 0, False)

    # --- Accessors ---

    @property
    def magnitude(self) -> int:
        """Unscaled magnitude."""
        return self._magnitude

    @property
    def scale(self) -> int:
        """Digits right of the decimal point (negative for trailing zeros)."""
        return self._scale

    @property
    def negative(self) -> bool:
        """Sign flag, never set for zero."""
        return self._negative

    @property
    def precision(self) -> int:
        """Number of significant digits in the magnitude (0 for zero)."""
        return _digit_count(self._magnitude)

    def is_zero(self) -> bool:
        """True if the magnitude is zero."""
        return self._magnitude == 0

    def is_sign_negative(self) -> bool:
        """True if the value is below zero."""
        return self._negative

    def as_tuple(self) -> tuple[int, int, bool]:
        """Return (magnitude, scale, negative)."""
        return (self._magnitude, self._scale, self._negative)

    def normalize(self) -> FixedDecimal:
        """Strip trailing zeros from the magnitude, adjusting the scale.

        The scale never drops below MIN_SCALE, so the result is always a
        valid value equal to self.
        """
        magnitude, scale = _normalized(self._magnitude, self._scale)
        if magnitude == 0:
            return FixedDecimal.zero()
        if scale < MIN_SCALE:
            shift = MIN_SCALE - scale
            magnitude, scale = magnitude * 10**shift, MIN_SCALE
        return FixedDecimal._from_parts_unchecked(magnitude, scale, self._negative)

    def to_decimal(self) -> Decimal:
        """Convert to a stdlib Decimal without rounding."""
        digits = tuple(int(c) for c in str(self._magnitude))
        return Decimal((1 if self._negative else 0, digits, -self._scale))

    # --- Rendering ---

    def __str__(self) -> str:
        """Canonical text form.

        Plain positional notation when re-parsing it stays within
        MAX_PRECISION digits, otherwise "<magnitude>e<exponent>".
        """
        if self._magnitude == 0:
            return "0"
        digits = str(self._magnitude)
        scale = self._scale
        if scale <= 0:
            plain_digits = len(digits) - scale
        else:
            plain_digits = max(len(digits), scale)

        if plain_digits > MAX_PRECISION:
            body = f"{digits}e{-scale}"
        elif scale <= 0:
            body = digits + "0" * -scale
        else:
            if len(digits) <= scale:
                digits = "0" * (scale - len(digits) + 1) + digits
            body = f"{digits[:-scale]}.{digits[-scale:]}"
        return f"-{body}" if self._negative else body

    def __repr__(self) -> str:
        return f"FixedDecimal('{self}')"

    # --- Comparison ---

    def _key(self) -> tuple[int, int, bool]:
        magnitude, scale = _normalized(self._magnitude, self._scale)
        if magnitude == 0:
            return (0, 0, False)
        return (magnitude, scale, self._negative)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedDecimal):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __bool__(self) -> bool:
        """True if non-zero."""
        return self._magnitude != 0

    # --- Pydantic integration ---

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            coerce_fixed_decimal,
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, return_schema=core_schema.str_schema(), when_used="json"
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {"type": "string", "format": "decimal"}


def coerce_fixed_decimal(value: Any, config: ParseConfig | None = None) -> FixedDecimal:
    """Convert text-like input to a FixedDecimal.

    Accepts FixedDecimal, str, bytes, int and finite stdlib Decimal. Floats
    are rejected because their text form is already rounded.

    Raises:
        ValueError: If the input type is not accepted or does not parse
    """
    from fixdec.parsing import parse

    if isinstance(value, FixedDecimal):
        if config is not None:
            _check_bounds(value, config)
        return value
    if isinstance(value, (bool, float)):
        raise ValueError(f"FixedDecimal cannot be built from {type(value).__name__}")
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"FixedDecimal cannot represent {value}")
        value = str(value)
    elif isinstance(value, int):
        value = str(value)
    if not isinstance(value, (str, bytes)):
        raise ValueError(f"FixedDecimal cannot be built from {type(value).__name__}")
    return parse(value, config or DEFAULT_PARSE_CONFIG)


def _check_bounds(value: FixedDecimal, config: ParseConfig) -> None:
    # Check the tightest equal representation: trailing zeros stripped, then
    # padded back up to min_scale, so 1.000 passes wherever "1.000" would
    magnitude, scale = _normalized(value.magnitude, value.scale)
    if magnitude == 0:
        return
    fitted_scale = max(scale, config.min_scale)
    if fitted_scale > config.max_scale:
        raise Overflow(f"scale {scale} outside [{config.min_scale}, {config.max_scale}]")
    precision = _digit_count(magnitude) + fitted_scale - scale
    if precision > config.max_precision:
        raise Overflow(f"precision {precision} exceeds {config.max_precision}")


def _digit_count(n: int) -> int:
    return len(str(n)) if n else 0


def _normalized(magnitude: int, scale: int) -> tuple[int, int]:
    if magnitude == 0:
        return 0, 0
    while magnitude % 10 == 0:
        magnitude //= 10
        scale -= 1
    return magnitude, scale


__all__ = ["FixedDecimal", "coerce_fixed_decimal"]
