"""In-memory price provider serving pre-loaded frames."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date

import pandas as pd

from priceprism.core.data.providers.base import PriceProvider
from priceprism.core.data.schema import REF_DATE, coerce_price_frame
from priceprism.core.exceptions import ProviderError
from priceprism.core.models.market import PriceSource


class StaticPriceProvider(PriceProvider):
    """Serves deterministic rows from frames supplied up front.

    Useful for offline runs and tests. Tickers without a frame raise
    :class:`ProviderError`, mimicking a failed download.
    """

    def __init__(
        self,
        frames: Mapping[str, pd.DataFrame],
        *,
        source: PriceSource = PriceSource.YAHOO,
        name: str = "static",
    ) -> None:
        self._frames = {ticker: coerce_price_frame(frame, ticker=ticker) for ticker, frame in frames.items()}
        self.source = source
        self.name = name
        self.calls: list[str] = []

    def fetch(self, ticker: str, first_date: date, last_date: date) -> pd.DataFrame:
        self.calls.append(ticker)
        frame = self._frames.get(ticker)
        if frame is None:
            raise ProviderError(f"No static data registered for {ticker}", self.name, details={"ticker": ticker})

        in_range = frame[REF_DATE].between(pd.Timestamp(first_date), pd.Timestamp(last_date))
        return frame.loc[in_range].reset_index(drop=True)


__all__ = ["StaticPriceProvider"]
