"""Exact fixed-point decimals parsed from text."""

from fixdec.config import DEFAULT_PARSE_CONFIG, ParseConfig
from fixdec.constants import MAX_PRECISION, MAX_SCALE, MIN_SCALE
from fixdec.errors import DecimalParseError, EmptyInput, InvalidFormat, Overflow, ParseErrorKind
from fixdec.parsing import parse
from fixdec.value import FixedDecimal

__version__ = "0.1.0"
__all__ = [
    "FixedDecimal",
    "parse",
    "ParseConfig",
    "DEFAULT_PARSE_CONFIG",
    "DecimalParseError",
    "EmptyInput",
    "InvalidFormat",
    "Overflow",
    "ParseErrorKind",
    "MAX_PRECISION",
    "MAX_SCALE",
    "MIN_SCALE",
    "__version__",
]
