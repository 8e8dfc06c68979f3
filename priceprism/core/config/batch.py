"""Batch request settings and up-front validation."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any

from priceprism.core.data.providers.registry import ProviderRegistry, classify_source
from priceprism.core.exceptions import ConfigurationError, ConfigurationErrorKind, ConfigurationIssue
from priceprism.core.models.market import Frequency, PriceSource, ReturnType

DEFAULT_BENCH_TICKER = "^GSPC"
DEFAULT_CACHE_FOLDER = "priceprism_cache"
DEFAULT_THRESHOLD = 0.75
DEFAULT_LOOKBACK_DAYS = 30


def _default_first_date() -> date:
    return date.today() - timedelta(days=DEFAULT_LOOKBACK_DAYS)


@dataclass(frozen=True)
class BatchSettings:
    """User-facing options of a batch download.

    Values are stored as given and only interpreted by
    :func:`resolve_batch_request`, so that every problem can be reported at
    once.
    """

    first_date: date | str = field(default_factory=_default_first_date)
    last_date: date | str = field(default_factory=date.today)
    bench_ticker: str = DEFAULT_BENCH_TICKER
    return_type: ReturnType | str = ReturnType.ARITHMETIC
    frequency: Frequency | str = Frequency.DAILY
    thresh_bad_data: float = DEFAULT_THRESHOLD
    do_complete_data: bool = False
    do_fill_missing_prices: bool = True
    do_cache: bool = True
    cache_folder: str | Path = DEFAULT_CACHE_FOLDER
    do_parallel: bool = False


@dataclass(frozen=True)
class BatchRequest:
    """Validated, fully typed form of a batch download."""

    tickers: tuple[str, ...]
    sources: dict[str, PriceSource]
    first_date: date
    last_date: date
    bench_ticker: str
    bench_source: PriceSource
    return_type: ReturnType
    frequency: Frequency
    thresh_bad_data: float
    do_complete_data: bool
    do_fill_missing_prices: bool
    do_cache: bool
    cache_folder: Path
    do_parallel: bool


def parse_date(value: Any) -> date | None:
    """Parse ``value`` as a calendar date, returning None when impossible."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def _parse_enum(enum_type: type, value: Any) -> Any:
    try:
        return enum_type(value)
    except ValueError:
        return None


def _ticker_issues(tickers: Sequence[Any]) -> list[ConfigurationIssue]:
    if not tickers:
        return [ConfigurationIssue(ConfigurationErrorKind.EMPTY_TICKERS, "tickers", "No tickers supplied.")]

    issues: list[ConfigurationIssue] = []
    for index, ticker in enumerate(tickers):
        if ticker is None or (isinstance(ticker, float) and ticker != ticker):
            issues.append(
                ConfigurationIssue(
                    ConfigurationErrorKind.NULL_TICKER,
                    "tickers",
                    f"Found a null value at position {index} of the ticker list; remove it first.",
                )
            )
        elif not isinstance(ticker, str) or not ticker.strip():
            issues.append(
                ConfigurationIssue(
                    ConfigurationErrorKind.NULL_TICKER,
                    "tickers",
                    f"Ticker at position {index} must be a non-empty string, got {ticker!r}.",
                )
            )
    return issues


def _source_issues(
    tickers: Sequence[str],
    registry: ProviderRegistry | None,
    field_name: str = "tickers",
) -> list[ConfigurationIssue]:
    issues: list[ConfigurationIssue] = []
    for ticker in tickers:
        source = classify_source(ticker)
        if source.deprecated:
            issues.append(
                ConfigurationIssue(
                    ConfigurationErrorKind.DEPRECATED_SOURCE,
                    field_name,
                    f"Ticker {ticker} maps to {source.value}, which no longer provides price data; "
                    "use Yahoo Finance tickers instead.",
                )
            )
        elif registry is not None and not registry.supports(source):
            issues.append(
                ConfigurationIssue(
                    ConfigurationErrorKind.UNSUPPORTED_SOURCE,
                    field_name,
                    f"No provider registered for source {source.value} (ticker {ticker}).",
                )
            )
    return issues


def collect_configuration_issues(
    tickers: Sequence[Any],
    settings: BatchSettings,
    *,
    registry: ProviderRegistry | None = None,
    executor: object | None = None,
) -> list[ConfigurationIssue]:
    """Check every option without touching the network or the cache."""

    tickers = list(tickers)
    issues = _ticker_issues(tickers)

    first_date = parse_date(settings.first_date)
    last_date = parse_date(settings.last_date)
    for name, raw, parsed in (
        ("first_date", settings.first_date, first_date),
        ("last_date", settings.last_date, last_date),
    ):
        if parsed is None:
            issues.append(
                ConfigurationIssue(
                    ConfigurationErrorKind.INVALID_DATE,
                    name,
                    f"{name} must be a date or a YYYY-MM-DD string, got {raw!r}.",
                )
            )
    if first_date is not None and last_date is not None and last_date <= first_date:
        issues.append(
            ConfigurationIssue(
                ConfigurationErrorKind.DATE_ORDER,
                "last_date",
                f"last_date ({last_date}) must be after first_date ({first_date}).",
            )
        )

    if _parse_enum(ReturnType, settings.return_type) is None:
        allowed = ", ".join(member.value for member in ReturnType)
        issues.append(
            ConfigurationIssue(
                ConfigurationErrorKind.INVALID_RETURN_TYPE,
                "return_type",
                f"return_type should be one of: {allowed}; got {settings.return_type!r}.",
            )
        )
    if _parse_enum(Frequency, settings.frequency) is None:
        allowed = ", ".join(member.value for member in Frequency)
        issues.append(
            ConfigurationIssue(
                ConfigurationErrorKind.INVALID_FREQUENCY,
                "frequency",
                f"frequency should be one of: {allowed}; got {settings.frequency!r}.",
            )
        )

    threshold = settings.thresh_bad_data
    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)) or not 0.0 <= threshold <= 1.0:
        issues.append(
            ConfigurationIssue(
                ConfigurationErrorKind.THRESHOLD_OUT_OF_RANGE,
                "thresh_bad_data",
                f"thresh_bad_data should be a proportion between 0 and 1, got {threshold!r}.",
            )
        )

    valid_tickers = [ticker for ticker in tickers if isinstance(ticker, str) and ticker.strip()]
    issues.extend(_source_issues(valid_tickers, registry))
    if isinstance(settings.bench_ticker, str) and settings.bench_ticker.strip():
        issues.extend(_source_issues([settings.bench_ticker], registry, "bench_ticker"))
    else:
        issues.append(
            ConfigurationIssue(
                ConfigurationErrorKind.NULL_TICKER,
                "bench_ticker",
                "bench_ticker must be a non-empty string.",
            )
        )

    if settings.do_parallel and executor is None:
        issues.append(
            ConfigurationIssue(
                ConfigurationErrorKind.PARALLEL_EXECUTOR_MISSING,
                "do_parallel",
                "do_parallel=True requires an executor, e.g. "
                "concurrent.futures.ThreadPoolExecutor(max_workers=4).",
            )
        )

    return issues


def resolve_batch_request(
    tickers: Sequence[Any],
    settings: BatchSettings,
    *,
    registry: ProviderRegistry | None = None,
    executor: object | None = None,
    connectivity_check: Callable[[], bool] | None = None,
) -> BatchRequest:
    """Validate ``settings`` and return the typed request.

    Raises:
        ConfigurationError: carrying every issue found. The connectivity
            check only runs once all other checks passed.
    """

    tickers = list(tickers)
    issues = collect_configuration_issues(tickers, settings, registry=registry, executor=executor)
    if not issues and connectivity_check is not None and not connectivity_check():
        issues.append(
            ConfigurationIssue(
                ConfigurationErrorKind.NO_CONNECTIVITY,
                "connectivity",
                "No internet connection found.",
            )
        )
    if issues:
        raise ConfigurationError(issues)

    unique_tickers = tuple(dict.fromkeys(ticker.strip() for ticker in tickers))
    bench_ticker = settings.bench_ticker.strip()
    return BatchRequest(
        tickers=unique_tickers,
        sources={ticker: classify_source(ticker) for ticker in unique_tickers},
        first_date=parse_date(settings.first_date),
        last_date=parse_date(settings.last_date),
        bench_ticker=bench_ticker,
        bench_source=classify_source(bench_ticker),
        return_type=ReturnType(settings.return_type),
        frequency=Frequency(settings.frequency),
        thresh_bad_data=float(settings.thresh_bad_data),
        do_complete_data=bool(settings.do_complete_data),
        do_fill_missing_prices=bool(settings.do_fill_missing_prices),
        do_cache=bool(settings.do_cache),
        cache_folder=Path(settings.cache_folder),
        do_parallel=bool(settings.do_parallel),
    )


__all__ = [
    "DEFAULT_BENCH_TICKER",
    "DEFAULT_CACHE_FOLDER",
    "DEFAULT_THRESHOLD",
    "BatchRequest",
    "BatchSettings",
    "collect_configuration_issues",
    "parse_date",
    "resolve_batch_request",
]
