from __future__ import annotations

import pytest

from priceprism.core.exceptions import (
    CacheError,
    ConfigurationError,
    ConfigurationErrorKind,
    ConfigurationIssue,
    ErrorCode,
    PricePrismError,
    ProviderError,
)


def test_configuration_error_collects_every_issue() -> None:
    issues = [
        ConfigurationIssue(ConfigurationErrorKind.EMPTY_TICKERS, "tickers", "No tickers supplied."),
        ConfigurationIssue(ConfigurationErrorKind.DATE_ORDER, "last_date", "Dates out of order."),
    ]

    error = ConfigurationError(issues)

    assert isinstance(error, PricePrismError)
    assert error.error_code == ErrorCode.CONFIGURATION_ERROR.value
    assert error.kind is ConfigurationErrorKind.EMPTY_TICKERS
    assert error.kinds == {ConfigurationErrorKind.EMPTY_TICKERS, ConfigurationErrorKind.DATE_ORDER}
    assert error.message == "No tickers supplied.; Dates out of order."
    assert error.details["issues"][1] == {
        "kind": "DATE_ORDER",
        "field": "last_date",
        "message": "Dates out of order.",
    }


def test_configuration_error_needs_an_issue() -> None:
    with pytest.raises(ValueError):
        ConfigurationError([])


def test_provider_errors_carry_provider_name() -> None:
    error = ProviderError("boom", "yfinance", details={"ticker": "AAPL"})
    assert error.details == {"ticker": "AAPL", "provider": "yfinance"}
    assert error.error_code == ErrorCode.PROVIDER_ERROR.value


def test_cache_error_records_cache_type() -> None:
    error = CacheError("disk full", "duckdb-parquet")
    assert error.details["cache_type"] == "duckdb-parquet"
    assert str(error) == "disk full"
