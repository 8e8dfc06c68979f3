"""Core schema definitions for long-format price panels."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd

TICKER = "ticker"
REF_DATE = "ref_date"
PRICE_OPEN = "price_open"
PRICE_HIGH = "price_high"
PRICE_LOW = "price_low"
PRICE_CLOSE = "price_close"
PRICE_ADJUSTED = "price_adjusted"
VOLUME = "volume"
RET_ADJUSTED = "ret_adjusted_prices"
RET_CLOSING = "ret_closing_prices"

PRICE_FIELDS: tuple[str, ...] = (PRICE_OPEN, PRICE_HIGH, PRICE_LOW, PRICE_CLOSE, PRICE_ADJUSTED)

# price used to decide whether a ticker has a usable observation on a date
PRIMARY_PRICE = PRICE_CLOSE


@dataclass(frozen=True)
class ColumnDef:
    """Represents a panel column and its pandas dtype."""

    name: str
    dtype: str


@dataclass(frozen=True)
class TableSchema:
    """Utility wrapper describing a long-format table."""

    name: str
    columns: Sequence[ColumnDef]
    key: Sequence[str] = ()

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self.columns]

    def empty_frame(self) -> pd.DataFrame:
        """Return a zero-row frame with the schema's columns and dtypes."""

        return pd.DataFrame(
            {column.name: pd.Series(dtype=column.dtype) for column in self.columns}
        )

    def missing_columns(self, frame: pd.DataFrame) -> list[str]:
        return [name for name in self.column_names if name not in frame.columns]


PRICE_TABLE = TableSchema(
    name="prices",
    columns=(
        ColumnDef(TICKER, "object"),
        ColumnDef(REF_DATE, "datetime64[ns]"),
        ColumnDef(PRICE_OPEN, "float64"),
        ColumnDef(PRICE_HIGH, "float64"),
        ColumnDef(PRICE_LOW, "float64"),
        ColumnDef(PRICE_CLOSE, "float64"),
        ColumnDef(PRICE_ADJUSTED, "float64"),
        ColumnDef(VOLUME, "float64"),
    ),
    key=(TICKER, REF_DATE),
)

PANEL_TABLE = TableSchema(
    name="panel",
    columns=(
        *PRICE_TABLE.columns,
        ColumnDef(RET_ADJUSTED, "float64"),
        ColumnDef(RET_CLOSING, "float64"),
    ),
    key=PRICE_TABLE.key,
)

PRICE_COLUMNS: tuple[str, ...] = tuple(PRICE_TABLE.column_names)
PANEL_COLUMNS: tuple[str, ...] = tuple(PANEL_TABLE.column_names)


def normalize_dates(values: pd.Series | pd.Index) -> pd.Series:
    """Convert timestamps to timezone-naive midnight datetimes.

    Aware timestamps keep their exchange-local calendar date.
    """

    dates = pd.Series(pd.to_datetime(values))
    if dates.dt.tz is not None:
        dates = dates.dt.tz_localize(None)
    return dates.dt.normalize().astype("datetime64[ns]")


def coerce_price_frame(frame: pd.DataFrame | None, ticker: str | None = None) -> pd.DataFrame:
    """Return ``frame`` restricted to the price columns with canonical dtypes.

    Rows are sorted by ticker and date; a repeated (ticker, date) pair keeps
    its last occurrence.
    """

    if frame is None or frame.empty:
        return PRICE_TABLE.empty_frame()

    working = frame.copy()
    if ticker is not None:
        working[TICKER] = ticker
    missing = PRICE_TABLE.missing_columns(working)
    missing_prices = [name for name in missing if name not in {TICKER, REF_DATE}]
    if len(missing_prices) != len(missing):
        raise ValueError(f"Missing required columns: {sorted(missing)}")
    for name in missing_prices:
        working[name] = float("nan")

    working = working[list(PRICE_COLUMNS)]
    working[TICKER] = working[TICKER].astype(str)
    working[REF_DATE] = normalize_dates(working[REF_DATE]).to_numpy()
    for name in (*PRICE_FIELDS, VOLUME):
        working[name] = pd.to_numeric(working[name], errors="coerce").astype("float64")

    working = working.dropna(subset=[REF_DATE])
    working = working.drop_duplicates(subset=list(PRICE_TABLE.key), keep="last")
    return working.sort_values(list(PRICE_TABLE.key)).reset_index(drop=True)


__all__ = [
    "PANEL_COLUMNS",
    "PANEL_TABLE",
    "PRICE_COLUMNS",
    "PRICE_FIELDS",
    "PRICE_TABLE",
    "PRIMARY_PRICE",
    "ColumnDef",
    "TableSchema",
    "coerce_price_frame",
    "normalize_dates",
]
