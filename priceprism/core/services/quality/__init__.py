"""priceprism data quality service utilities."""

from priceprism.core.services.quality.coverage import (
    CoverageResult,
    assess_coverage,
    benchmark_dates,
    build_control_record,
    decide,
    filter_kept,
    kept_tickers,
)

__all__ = [
    "CoverageResult",
    "assess_coverage",
    "benchmark_dates",
    "build_control_record",
    "decide",
    "filter_kept",
    "kept_tickers",
]
