"""Coverage screening of fetched tickers against a benchmark calendar."""

from __future__ import annotations

from collections.abc import Collection, Iterable
from dataclasses import dataclass
from datetime import date

import pandas as pd

from priceprism.core.data.schema import PRIMARY_PRICE, REF_DATE, TICKER, normalize_dates
from priceprism.core.models.control import ControlRecord, Decision, DownloadStatus
from priceprism.core.models.market import PriceSource


@dataclass(frozen=True)
class CoverageResult:
    """Computed coverage metrics for a single ticker."""

    expected_days: int
    covered_days: int
    coverage: float
    decision: Decision


def benchmark_dates(rows: pd.DataFrame) -> frozenset[pd.Timestamp]:
    """Return the benchmark calendar contained in ``rows``."""

    if rows.empty:
        return frozenset()
    return frozenset(normalize_dates(rows[REF_DATE]))


def decide(coverage: float, threshold: float) -> Decision:
    """KEEP iff ``coverage`` reaches ``threshold``."""

    return Decision.KEEP if coverage >= threshold else Decision.OUT


def assess_coverage(
    rows: pd.DataFrame,
    calendar: Collection[pd.Timestamp],
    threshold: float,
) -> CoverageResult:
    """Measure how many benchmark dates carry a usable price in ``rows``.

    An empty calendar yields a coverage of zero.
    """

    expected_days = len(calendar)
    if expected_days == 0 or rows.empty:
        return CoverageResult(expected_days, 0, 0.0, decide(0.0, threshold))

    usable = rows.loc[rows[PRIMARY_PRICE].notna(), REF_DATE]
    observed = set(normalize_dates(usable))
    covered_days = sum(1 for day in calendar if day in observed)
    coverage = covered_days / expected_days
    return CoverageResult(expected_days, covered_days, coverage, decide(coverage, threshold))


def build_control_record(
    *,
    ticker: str,
    source: PriceSource,
    first_date: date,
    last_date: date,
    rows: pd.DataFrame,
    calendar: Collection[pd.Timestamp],
    threshold: float,
    download_ok: bool = True,
) -> ControlRecord:
    """Screen ``rows`` and wrap the outcome in a :class:`ControlRecord`."""

    result = assess_coverage(rows, calendar, threshold)
    return ControlRecord(
        ticker=ticker,
        source=source,
        first_date=first_date,
        last_date=last_date,
        download_status=DownloadStatus.OK if download_ok else DownloadStatus.NOT_OK,
        total_obs=int(len(rows)),
        coverage=result.coverage,
        decision=result.decision,
    )


def kept_tickers(records: Iterable[ControlRecord]) -> list[str]:
    return [record.ticker for record in records if record.kept]


def filter_kept(prices: pd.DataFrame, records: Iterable[ControlRecord]) -> pd.DataFrame:
    """Drop every row whose ticker was screened out."""

    keep = kept_tickers(records)
    return prices.loc[prices[TICKER].isin(keep)].reset_index(drop=True)


__all__ = [
    "CoverageResult",
    "assess_coverage",
    "benchmark_dates",
    "build_control_record",
    "decide",
    "filter_kept",
    "kept_tickers",
]
