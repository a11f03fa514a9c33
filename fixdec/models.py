"""Pydantic field types for fixed-point decimals.

FixedDecimal can be used directly as a model field type; it accepts decimal
text (and ints / finite stdlib Decimals via their text) and serializes to
its canonical string in JSON mode.

bounded_decimal(...) builds a field type with narrower bounds, the way a
NUMERIC(precision, scale) column constrains its values:

    class Row(BaseModel):
        price: bounded_decimal(max_precision=18, max_scale=8)
"""

from __future__ import annotations

from functools import partial
from typing import Annotated, Any

from pydantic import BeforeValidator

from fixdec.config import ParseConfig
from fixdec.constants import MAX_PRECISION, MAX_SCALE, MIN_SCALE
from fixdec.value import FixedDecimal, coerce_fixed_decimal


def bounded_decimal(
    max_precision: int = MAX_PRECISION,
    max_scale: int = MAX_SCALE,
    min_scale: int = MIN_SCALE,
) -> Any:
    """Return an annotated FixedDecimal type limited to the given bounds.

    Raises:
        ValueError: If the bounds are wider than FixedDecimal's own
    """
    config = ParseConfig(max_precision=max_precision, max_scale=max_scale, min_scale=min_scale)
    return Annotated[FixedDecimal, BeforeValidator(partial(coerce_fixed_decimal, config=config))]


# Full-range decimal field
DecimalText = Annotated[FixedDecimal, BeforeValidator(coerce_fixed_decimal)]

__all__ = ["bounded_decimal", "DecimalText"]
