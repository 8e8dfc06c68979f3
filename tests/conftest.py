"""Pytest configuration for priceprism test suite."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence

import pandas as pd
import pytest

from priceprism.core.data.providers import StaticPriceProvider
from priceprism.core.logging import configure_logging

PriceFrameFactory = Callable[..., pd.DataFrame]


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line options for controlling integration tests."""

    parser.addoption(
        "--priceprism-run-integration",
        action="store_true",
        default=False,
        help="Run priceprism integration tests that require network access.",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register the integration marker for priceprism tests."""

    config.addinivalue_line(
        "markers",
        "integration: marks priceprism tests requiring network or external services",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly requested."""

    if config.getoption("--priceprism-run-integration"):
        return

    skip_integration = pytest.mark.skip(
        reason="integration tests require --priceprism-run-integration",
    )
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    # CLI tests point the sink at CliRunner streams that are closed afterwards
    configure_logging("WARNING")
    yield
    configure_logging("WARNING")


def make_price_frame(
    ticker: str,
    dates: Sequence[str] | pd.DatetimeIndex,
    closes: Sequence[float | None],
    *,
    volumes: Sequence[float | None] | None = None,
) -> pd.DataFrame:
    """Build price rows where every price field follows ``closes``."""

    closes = [float("nan") if value is None else float(value) for value in closes]
    volumes = volumes if volumes is not None else [1000.0] * len(closes)
    return pd.DataFrame(
        {
            "ticker": ticker,
            "ref_date": pd.to_datetime(list(dates)),
            "price_open": closes,
            "price_high": closes,
            "price_low": closes,
            "price_close": closes,
            "price_adjusted": closes,
            "volume": [float("nan") if value is None else float(value) for value in volumes],
        }
    )


@pytest.fixture()
def price_frame() -> PriceFrameFactory:
    return make_price_frame


@pytest.fixture()
def trading_days() -> pd.DatetimeIndex:
    """100 business days starting 2024-01-01."""

    return pd.bdate_range("2024-01-01", periods=100)


@pytest.fixture()
def scenario_provider(trading_days: pd.DatetimeIndex) -> StaticPriceProvider:
    """Benchmark and A cover all 100 days, B only the first 50."""

    prices = [100.0 + index for index in range(len(trading_days))]
    return StaticPriceProvider(
        {
            "^GSPC": make_price_frame("^GSPC", trading_days, prices),
            "A": make_price_frame("A", trading_days, prices),
            "B": make_price_frame("B", trading_days[:50], prices[:50]),
        }
    )
