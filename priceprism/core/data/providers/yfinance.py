"""Yahoo Finance数据提供商实现."""

from __future__ import annotations

from datetime import date, timedelta

import pandas as pd
import yfinance as yf

from priceprism.core.data.providers.base import PriceProvider
from priceprism.core.data.schema import (
    PRICE_ADJUSTED,
    PRICE_CLOSE,
    PRICE_HIGH,
    PRICE_LOW,
    PRICE_OPEN,
    REF_DATE,
    VOLUME,
    coerce_price_frame,
)
from priceprism.core.exceptions import ProviderError
from priceprism.core.logging import get_logger
from priceprism.core.models.market import PriceSource

logger = get_logger(__name__)

_COLUMN_MAP = {
    "Open": PRICE_OPEN,
    "High": PRICE_HIGH,
    "Low": PRICE_LOW,
    "Close": PRICE_CLOSE,
    "Adj Close": PRICE_ADJUSTED,
    "Volume": VOLUME,
}


class YFinanceProvider(PriceProvider):
    """Yahoo Finance数据提供商实现."""

    name = "yfinance"
    source = PriceSource.YAHOO

    def fetch(self, ticker: str, first_date: date, last_date: date) -> pd.DataFrame:
        """下载日线数据, 包含 ``last_date`` 当天."""

        try:
            history = yf.Ticker(ticker).history(
                start=first_date.isoformat(),
                # yfinance treats ``end`` as exclusive
                end=(last_date + timedelta(days=1)).isoformat(),
                interval="1d",
                auto_adjust=False,
                actions=False,
            )
        except Exception as exc:
            raise ProviderError(
                f"Yahoo Finance download failed for {ticker}: {exc}",
                self.name,
                details={"ticker": ticker},
            ) from exc

        if history is None or history.empty:
            logger.bind(ticker=ticker).warning("Yahoo Finance returned no rows")
            return coerce_price_frame(None)

        try:
            return self._normalize(history, ticker)
        except (KeyError, TypeError, ValueError) as exc:
            raise ProviderError(
                f"Yahoo Finance returned malformed history for {ticker}: {exc}",
                self.name,
                details={"ticker": ticker},
            ) from exc

    @staticmethod
    def _normalize(history: pd.DataFrame, ticker: str) -> pd.DataFrame:
        if isinstance(history.columns, pd.MultiIndex):
            history = history.copy()
            history.columns = history.columns.get_level_values(0)
        renamed = history.rename(columns=_COLUMN_MAP)
        renamed[REF_DATE] = renamed.index
        return coerce_price_frame(renamed.reset_index(drop=True), ticker=ticker)


__all__ = ["YFinanceProvider"]
