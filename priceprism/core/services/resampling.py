"""Calendar-bucketed frequency resampling of daily price rows."""

from __future__ import annotations

from collections.abc import Callable

import pandas as pd

from priceprism.core.data.schema import (
    PRICE_ADJUSTED,
    PRICE_CLOSE,
    PRICE_COLUMNS,
    PRICE_HIGH,
    PRICE_LOW,
    PRICE_OPEN,
    REF_DATE,
    TICKER,
    VOLUME,
)
from priceprism.core.models.market import Frequency

BucketFunction = Callable[[pd.Series], pd.Series]

_BUCKET = "_bucket"


def weekly_buckets(dates: pd.Series) -> pd.Series:
    """7-day bins anchored at January 1 of the earliest year present."""

    anchor = pd.Timestamp(year=int(dates.dt.year.min()), month=1, day=1)
    return (dates - anchor).dt.days // 7


def monthly_buckets(dates: pd.Series) -> pd.Series:
    return dates.dt.to_period("M")


def yearly_buckets(dates: pd.Series) -> pd.Series:
    return dates.dt.year


BUCKET_FUNCTIONS: dict[Frequency, BucketFunction] = {
    Frequency.WEEKLY: weekly_buckets,
    Frequency.MONTHLY: monthly_buckets,
    Frequency.YEARLY: yearly_buckets,
}


def _first_observation(values: pd.Series) -> float:
    # the chronologically first row, even when that value is null
    return values.iloc[0]


def resample_prices(prices: pd.DataFrame, frequency: Frequency | str) -> pd.DataFrame:
    """Aggregate daily rows into one row per (ticker, calendar bucket).

    ``ref_date`` becomes the earliest date of the bucket and volumes are
    summed. Open, close and adjusted prices come from the first row of the
    bucket while high and low are the extremes of the closing price.

    Null closes are skipped for high and low, so a bucket with one missing
    close still reports the extremes of the closes it has. A bucket with no
    close at all gets null high and low.
    """

    frequency = Frequency(frequency)
    if frequency is Frequency.DAILY or prices.empty:
        return prices.copy()

    ordered = prices.sort_values([TICKER, REF_DATE]).reset_index(drop=True)
    ordered[_BUCKET] = BUCKET_FUNCTIONS[frequency](ordered[REF_DATE])

    aggregated = (
        ordered.groupby([TICKER, _BUCKET], sort=False)
        .agg(
            **{
                REF_DATE: (REF_DATE, "min"),
                PRICE_OPEN: (PRICE_OPEN, _first_observation),
                PRICE_HIGH: (PRICE_CLOSE, "max"),
                PRICE_LOW: (PRICE_CLOSE, "min"),
                PRICE_CLOSE: (PRICE_CLOSE, _first_observation),
                PRICE_ADJUSTED: (PRICE_ADJUSTED, _first_observation),
                VOLUME: (VOLUME, "sum"),
            }
        )
        .reset_index()
    )
    numeric = {name: "float64" for name in PRICE_COLUMNS if name not in (TICKER, REF_DATE)}
    return (
        aggregated.loc[:, list(PRICE_COLUMNS)]
        .astype(numeric)
        .sort_values([TICKER, REF_DATE])
        .reset_index(drop=True)
    )


__all__ = [
    "BUCKET_FUNCTIONS",
    "BucketFunction",
    "monthly_buckets",
    "resample_prices",
    "weekly_buckets",
    "yearly_buckets",
]
