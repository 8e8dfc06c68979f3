"""Batch orchestration: validate, fetch every ticker, screen and shape the panel."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from concurrent.futures import Executor
from dataclasses import dataclass, replace
from typing import Any

import pandas as pd

from priceprism.core.config.batch import BatchRequest, BatchSettings, resolve_batch_request
from priceprism.core.data.cache import DuckDBPriceCache, PriceCache
from priceprism.core.data.providers.base import PriceProvider
from priceprism.core.data.providers.registry import ProviderRegistry, create_default_registry
from priceprism.core.data.schema import PANEL_COLUMNS, coerce_price_frame
from priceprism.core.logging import current_trace_id, get_logger, log_context
from priceprism.core.models.control import ControlRecord, control_frame
from priceprism.core.models.market import Frequency, PriceSource
from priceprism.core.services.completion import complete_panel
from priceprism.core.services.connectivity import has_internet
from priceprism.core.services.fetch import FetchResult, PriceFetchTask, run_fetch_task
from priceprism.core.services.quality.coverage import benchmark_dates, filter_kept
from priceprism.core.services.resampling import resample_prices
from priceprism.core.services.returns import compute_returns

logger = get_logger(__name__)

ProviderSpec = ProviderRegistry | Mapping[PriceSource, PriceProvider] | Iterable[PriceProvider]


@dataclass(frozen=True)
class BatchResult:
    """Control report plus the final price panel."""

    control: pd.DataFrame
    prices: pd.DataFrame
    records: tuple[ControlRecord, ...] = ()

    def __iter__(self):
        # allows ``control, prices = batch_get_prices(...)``
        return iter((self.control, self.prices))


def _as_registry(providers: ProviderSpec | None) -> ProviderRegistry:
    if providers is None:
        return create_default_registry()
    if isinstance(providers, ProviderRegistry):
        return providers
    return ProviderRegistry(providers)


class BatchOrchestrator:
    """Coordinates one batch download.

    Args:
        providers: registry (or mapping/iterable of providers) used to serve
            each price source. Defaults to Yahoo Finance.
        cache: cache shared by all tasks. When omitted and caching is
            enabled, a :class:`DuckDBPriceCache` is opened in the configured
            cache folder.
        connectivity_check: probe run once before any fetch.
    """

    def __init__(
        self,
        providers: ProviderSpec | None = None,
        *,
        cache: PriceCache | None = None,
        connectivity_check: Callable[[], bool] = has_internet,
    ) -> None:
        self.registry = _as_registry(providers)
        self.cache = cache
        self.connectivity_check = connectivity_check

    def run(
        self,
        tickers: Sequence[str],
        settings: BatchSettings | None = None,
        *,
        executor: Executor | None = None,
    ) -> BatchResult:
        """Download, screen and shape ``tickers``.

        Raises:
            ConfigurationError: before any cache or network access when the
                request is invalid, the connection is down or parallel mode
                lacks an executor.
        """

        request = resolve_batch_request(
            tickers,
            settings or BatchSettings(),
            registry=self.registry,
            executor=executor,
            connectivity_check=self.connectivity_check,
        )

        with log_context(bench_ticker=request.bench_ticker):
            logger.info(
                f"Running batch for {len(request.tickers)} tickers "
                f"from {request.first_date} to {request.last_date}: {', '.join(request.tickers)}"
            )
            cache = self._open_cache(request)

            logger.info(f"Downloading benchmark {request.bench_ticker}")
            benchmark = self._task(request, request.bench_ticker, request.bench_source, cache).run()
            calendar = benchmark_dates(benchmark.rows)
            if not calendar:
                logger.warning(f"Benchmark {request.bench_ticker} returned no dates; every ticker will be dropped")

            tasks = [
                self._task(
                    request,
                    ticker,
                    request.sources[ticker],
                    cache,
                    calendar=calendar,
                    position=position,
                    total=len(request.tickers),
                )
                for position, ticker in enumerate(request.tickers, start=1)
            ]
            results = self._dispatch(tasks, request, executor)
            return self._assemble(results, request)

    def _open_cache(self, request: BatchRequest) -> PriceCache | None:
        if not request.do_cache:
            return None
        if self.cache is not None:
            return self.cache
        request.cache_folder.mkdir(parents=True, exist_ok=True)
        return DuckDBPriceCache(request.cache_folder)

    def _task(
        self,
        request: BatchRequest,
        ticker: str,
        source: PriceSource,
        cache: PriceCache | None,
        *,
        calendar: frozenset[pd.Timestamp] = frozenset(),
        position: int = 1,
        total: int = 1,
    ) -> PriceFetchTask:
        return PriceFetchTask(
            ticker=ticker,
            source=source,
            first_date=request.first_date,
            last_date=request.last_date,
            provider=self.registry.get(source),
            cache=cache,
            calendar=calendar,
            threshold=request.thresh_bad_data,
            position=position,
            total=total,
            # context vars stay behind in executor workers
            trace_id=current_trace_id(),
            log_fields=(("bench_ticker", request.bench_ticker),),
        )

    @staticmethod
    def _dispatch(
        tasks: list[PriceFetchTask],
        request: BatchRequest,
        executor: Executor | None,
    ) -> list[FetchResult]:
        if request.do_parallel:
            logger.info(f"Dispatching {len(tasks)} tasks to {type(executor).__name__}")
            # map keeps submission order, so control rows follow the input tickers
            return list(executor.map(run_fetch_task, tasks))
        return [task.run() for task in tasks]

    @staticmethod
    def _assemble(results: list[FetchResult], request: BatchRequest) -> BatchResult:
        records = tuple(result.control for result in results)
        frames = [result.rows for result in results if not result.rows.empty]
        prices = coerce_price_frame(pd.concat(frames, ignore_index=True) if frames else None)

        prices = filter_kept(prices, records)
        if request.do_complete_data:
            prices = complete_panel(prices, fill_missing=request.do_fill_missing_prices)
        if request.frequency is not Frequency.DAILY:
            prices = resample_prices(prices, request.frequency)
        prices = compute_returns(prices, request.return_type).loc[:, list(PANEL_COLUMNS)]

        kept = sum(1 for record in records if record.kept)
        cached = sum(1 for result in results if result.from_cache)
        logger.info(
            f"Batch finished: kept {kept} of {len(records)} tickers, {len(prices)} rows, {cached} read from cache"
        )
        return BatchResult(control=control_frame(records), prices=prices, records=records)


def batch_get_prices(
    tickers: Sequence[str],
    settings: BatchSettings | None = None,
    *,
    executor: Executor | None = None,
    providers: ProviderSpec | None = None,
    cache: PriceCache | None = None,
    connectivity_check: Callable[[], bool] = has_internet,
    **options: Any,
) -> BatchResult:
    """Batch download of daily prices with quality screening.

    ``options`` override individual :class:`BatchSettings` fields, e.g.
    ``batch_get_prices(["AAPL", "MSFT"], first_date="2024-01-01",
    last_date="2024-06-30", frequency="weekly")``.

    Examples:
        >>> result = batch_get_prices(["AAPL", "MSFT"], do_cache=False)  # doctest: +SKIP
        >>> result.control[["ticker", "coverage", "decision"]]  # doctest: +SKIP
    """

    resolved = replace(settings or BatchSettings(), **options) if options else settings
    orchestrator = BatchOrchestrator(providers, cache=cache, connectivity_check=connectivity_check)
    return orchestrator.run(tickers, resolved, executor=executor)


__all__ = ["BatchOrchestrator", "BatchResult", "batch_get_prices"]
