"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
import structlog

from fixdec.config import ParseConfig


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Undo any structlog configuration a test (e.g. the CLI) installed."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def narrow_config() -> ParseConfig:
    """NUMERIC(10, 4)-like bounds."""
    return ParseConfig(max_precision=10, max_scale=4, min_scale=-2)
