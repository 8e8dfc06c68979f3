from __future__ import annotations

from datetime import date

import pandas as pd
import pytest

from priceprism.core.data.providers import (
    ProviderRegistry,
    StaticPriceProvider,
    YFinanceProvider,
    classify_source,
    create_default_registry,
)
from priceprism.core.data.providers import yfinance as yfinance_module
from priceprism.core.exceptions import ProviderError
from priceprism.core.models import PriceSource


@pytest.mark.parametrize(
    ("ticker", "expected"),
    [
        ("AAPL", PriceSource.YAHOO),
        ("PETR4.SA", PriceSource.YAHOO),
        ("^GSPC", PriceSource.YAHOO),
        ("NASDAQ:AAPL", PriceSource.GOOGLE),
    ],
)
def test_classify_source(ticker: str, expected: PriceSource) -> None:
    assert classify_source(ticker) is expected


def test_registry_lookup() -> None:
    provider = StaticPriceProvider({})
    registry = ProviderRegistry([provider])

    assert registry.get(PriceSource.YAHOO) is provider
    assert registry.supports(PriceSource.YAHOO)
    assert not registry.supports(PriceSource.GOOGLE)
    assert registry.get(PriceSource.GOOGLE) is None
    assert registry.sources == {PriceSource.YAHOO}


def test_registry_accepts_mapping() -> None:
    provider = StaticPriceProvider({})
    registry = ProviderRegistry({PriceSource.GOOGLE: provider})
    assert registry.get(PriceSource.GOOGLE) is provider


def test_default_registry_uses_yfinance() -> None:
    assert isinstance(create_default_registry().get(PriceSource.YAHOO), YFinanceProvider)


def test_static_provider_filters_by_date_range(price_frame) -> None:
    rows = price_frame("A", ["2024-01-01", "2024-01-02", "2024-01-03", "2024-01-04"], [1, 2, 3, 4])
    provider = StaticPriceProvider({"A": rows})

    fetched = provider.fetch("A", date(2024, 1, 2), date(2024, 1, 3))

    assert fetched["price_close"].tolist() == [2.0, 3.0]
    assert provider.calls == ["A"]


def test_static_provider_unknown_ticker_fails() -> None:
    provider = StaticPriceProvider({})
    with pytest.raises(ProviderError) as excinfo:
        provider.fetch("ZZZ", date(2024, 1, 1), date(2024, 1, 31))
    assert excinfo.value.details["ticker"] == "ZZZ"


class _StubTicker:
    def __init__(self, history: pd.DataFrame | Exception) -> None:
        self._history = history
        self.kwargs: dict[str, object] = {}

    def history(self, **kwargs: object) -> pd.DataFrame:
        self.kwargs = kwargs
        if isinstance(self._history, Exception):
            raise self._history
        return self._history


def _yahoo_history() -> pd.DataFrame:
    index = pd.DatetimeIndex(["2024-01-02", "2024-01-03"], name="Date").tz_localize("America/New_York")
    return pd.DataFrame(
        {
            "Open": [10.0, 11.0],
            "High": [10.5, 11.5],
            "Low": [9.5, 10.5],
            "Close": [10.2, 11.2],
            "Adj Close": [10.1, 11.1],
            "Volume": [1000, 2000],
        },
        index=index,
    )


def test_yfinance_provider_normalizes_history(monkeypatch: pytest.MonkeyPatch) -> None:
    stub = _StubTicker(_yahoo_history())
    monkeypatch.setattr(yfinance_module.yf, "Ticker", lambda ticker: stub)

    rows = YFinanceProvider().fetch("AAPL", date(2024, 1, 2), date(2024, 1, 3))

    assert rows["ticker"].tolist() == ["AAPL", "AAPL"]
    assert rows["ref_date"].tolist() == [pd.Timestamp("2024-01-02"), pd.Timestamp("2024-01-03")]
    assert rows["price_adjusted"].tolist() == [10.1, 11.1]
    assert rows["volume"].tolist() == [1000.0, 2000.0]
    # end is exclusive upstream
    assert stub.kwargs["end"] == "2024-01-04"
    assert stub.kwargs["auto_adjust"] is False


def test_yfinance_provider_empty_history(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(yfinance_module.yf, "Ticker", lambda ticker: _StubTicker(pd.DataFrame()))

    rows = YFinanceProvider().fetch("DELISTED", date(2024, 1, 2), date(2024, 1, 3))

    assert rows.empty


def test_yfinance_provider_wraps_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(yfinance_module.yf, "Ticker", lambda ticker: _StubTicker(RuntimeError("rate limited")))

    with pytest.raises(ProviderError) as excinfo:
        YFinanceProvider().fetch("AAPL", date(2024, 1, 2), date(2024, 1, 3))

    assert excinfo.value.provider_name == "yfinance"
    assert "rate limited" in excinfo.value.message


def test_yfinance_provider_rejects_malformed_history(monkeypatch: pytest.MonkeyPatch) -> None:
    history = pd.DataFrame({"Close": [10.2]}, index=["not-a-date"])
    monkeypatch.setattr(yfinance_module.yf, "Ticker", lambda ticker: _StubTicker(history))

    with pytest.raises(ProviderError) as excinfo:
        YFinanceProvider().fetch("AAPL", date(2024, 1, 2), date(2024, 1, 3))

    assert excinfo.value.details["ticker"] == "AAPL"
    assert "malformed" in excinfo.value.message
