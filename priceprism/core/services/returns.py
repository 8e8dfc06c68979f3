"""Per-ticker arithmetic and logarithmic returns."""

from __future__ import annotations

import numpy as np
import pandas as pd

from priceprism.core.data.schema import (
    PRICE_ADJUSTED,
    PRICE_CLOSE,
    REF_DATE,
    RET_ADJUSTED,
    RET_CLOSING,
    TICKER,
)
from priceprism.core.models.market import ReturnType

# (price column, return column) pairs
TRACKED_SERIES: tuple[tuple[str, str], ...] = (
    (PRICE_ADJUSTED, RET_ADJUSTED),
    (PRICE_CLOSE, RET_CLOSING),
)


def period_returns(prices: pd.Series, previous: pd.Series, return_type: ReturnType) -> pd.Series:
    if return_type is ReturnType.LOG:
        return np.log(prices / previous)
    return (prices - previous) / previous


def compute_returns(prices: pd.DataFrame, return_type: ReturnType | str = ReturnType.ARITHMETIC) -> pd.DataFrame:
    """Append adjusted and closing returns computed within each ticker.

    The first row of every ticker has no predecessor and gets a null
    return; null prices propagate to null returns.
    """

    return_type = ReturnType(return_type)
    ordered = prices.sort_values([TICKER, REF_DATE]).reset_index(drop=True)
    grouped = ordered.groupby(TICKER, sort=False)
    for price_column, return_column in TRACKED_SERIES:
        previous = grouped[price_column].shift(1)
        ordered[return_column] = period_returns(ordered[price_column], previous, return_type).astype("float64")
    return ordered


__all__ = ["TRACKED_SERIES", "compute_returns", "period_returns"]
