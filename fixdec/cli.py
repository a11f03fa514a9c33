"""Command-line entry point: parse decimal literals and print them.

Usage:
    fixdec 128.128 "  0000123  "
    fixdec -- -1e-10          # "--" before literals that look like options
    fixdec --parts --max-precision 18 --max-scale 8 0.12345678

Exit codes:
    0 - All literals parsed
    1 - At least one literal was rejected
    2 - Usage error

Environment:
    FIXDEC_LOG_LEVEL: Default for --log-level (default: warning)
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence

import structlog

from fixdec.config import ParseConfig
from fixdec.constants import MAX_PRECISION, MAX_SCALE, MIN_SCALE
from fixdec.errors import DecimalParseError
from fixdec.parsing import parse

LOG_LEVELS = ["debug", "info", "warning", "error"]


def configure_logging(level: str) -> None:
    """Route structlog output to stderr, filtered at `level`."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fixdec",
        description="Parse decimal literals into exact fixed-point values",
    )
    parser.add_argument("literals", nargs="+", metavar="LITERAL", help="Decimal text to parse")
    parser.add_argument(
        "--max-precision",
        type=int,
        default=MAX_PRECISION,
        help=f"Maximum significant digits (default: {MAX_PRECISION})",
    )
    parser.add_argument(
        "--max-scale",
        type=int,
        default=MAX_SCALE,
        help=f"Maximum digits right of the decimal point (default: {MAX_SCALE})",
    )
    parser.add_argument(
        "--min-scale",
        type=int,
        default=MIN_SCALE,
        help=f"Most negative scale (default: {MIN_SCALE})",
    )
    parser.add_argument(
        "--parts",
        action="store_true",
        help="Print 'magnitude scale negative' instead of the canonical text",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=os.environ.get("FIXDEC_LOG_LEVEL", "warning").lower(),
        help="Log level (default: $FIXDEC_LOG_LEVEL or warning)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the fixdec command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.log_level not in LOG_LEVELS:
        parser.error(f"invalid log level: {args.log_level}")
    configure_logging(args.log_level)

    try:
        config = ParseConfig(
            max_precision=args.max_precision,
            max_scale=args.max_scale,
            min_scale=args.min_scale,
        )
    except ValueError as exc:
        parser.error(str(exc))

    failed = 0
    for literal in args.literals:
        try:
            value = parse(literal, config)
        except DecimalParseError as exc:
            print(f"error: {exc.kind.value}: {exc} ({literal!r})", file=sys.stderr)
            failed += 1
            continue
        if args.parts:
            magnitude, scale, negative = value.as_tuple()
            print(f"{magnitude} {scale} {str(negative).lower()}")
        else:
            print(value)

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
