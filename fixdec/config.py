"""Parser configuration."""

from dataclasses import dataclass

from fixdec.constants import MAX_PRECISION, MAX_SCALE, MIN_SCALE


@dataclass(frozen=True)
class ParseConfig:
    """Bounds applied while parsing decimal text.

    The defaults are the value type's own bounds. A config may only narrow
    them (e.g. to mirror a NUMERIC(p, s) column); widening would break the
    pairing between MAX_PRECISION and the 128-bit accumulator.

    Attributes:
        max_precision: Maximum significant digits (default: 38)
        max_scale: Maximum digits right of the decimal point (default: 130)
        min_scale: Most negative scale allowed (default: -126)
    """

    max_precision: int = MAX_PRECISION
    max_scale: int = MAX_SCALE
    min_scale: int = MIN_SCALE

    def __post_init__(self) -> None:
        if not 1 <= self.max_precision <= MAX_PRECISION:
            raise ValueError(
                f"max_precision must be in [1, {MAX_PRECISION}], got {self.max_precision}"
            )
        if not 0 <= self.max_scale <= MAX_SCALE:
            raise ValueError(f"max_scale must be in [0, {MAX_SCALE}], got {self.max_scale}")
        if not MIN_SCALE <= self.min_scale <= 0:
            raise ValueError(f"min_scale must be in [{MIN_SCALE}, 0], got {self.min_scale}")


# Default configuration instance
DEFAULT_PARSE_CONFIG = ParseConfig()
