"""Dense ticker × date grid completion and gap filling."""

from __future__ import annotations

import pandas as pd

from priceprism.core.data.schema import PRICE_COLUMNS, PRICE_FIELDS, REF_DATE, TICKER, VOLUME


def complete_panel(prices: pd.DataFrame, *, fill_missing: bool = True) -> pd.DataFrame:
    """Expand ``prices`` to every (ticker, date) pair it mentions.

    Pairs absent from the input are inserted with null fields. With
    ``fill_missing`` the gaps are then filled by :func:`fill_missing_prices`.
    """

    if prices.empty:
        return prices.copy()

    grid = pd.MultiIndex.from_product(
        [prices[TICKER].unique(), pd.DatetimeIndex(prices[REF_DATE].unique()).sort_values()],
        names=[TICKER, REF_DATE],
    )
    completed = (
        prices.set_index([TICKER, REF_DATE])
        .reindex(grid)
        .reset_index()
        .loc[:, list(PRICE_COLUMNS)]
    )
    if fill_missing:
        return fill_missing_prices(completed)
    return completed.sort_values([TICKER, REF_DATE]).reset_index(drop=True)


def fill_missing_prices(prices: pd.DataFrame) -> pd.DataFrame:
    """Fill null prices per ticker, preferring the previous observation.

    Each price field is forward filled in date order, then leading gaps are
    back filled from the next observation. Null volumes become zero. A field
    that is null for a ticker's whole history stays null.
    """

    ordered = prices.sort_values([TICKER, REF_DATE]).reset_index(drop=True)
    fields = list(PRICE_FIELDS)
    forward = ordered.groupby(TICKER, sort=False)[fields].ffill()
    ordered[fields] = forward.groupby(ordered[TICKER], sort=False).bfill()
    ordered[VOLUME] = ordered[VOLUME].fillna(0.0)
    return ordered


__all__ = ["complete_panel", "fill_missing_prices"]
