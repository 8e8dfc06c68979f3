"""Single-ticker fetch task: cache lookup, download and quality screen."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

import pandas as pd

from priceprism.core.data.cache import CacheKey, PriceCache
from priceprism.core.data.providers.base import PriceProvider
from priceprism.core.data.schema import coerce_price_frame
from priceprism.core.exceptions import CacheError, ProviderError
from priceprism.core.logging import get_logger, log_context
from priceprism.core.models.control import ControlRecord
from priceprism.core.models.market import PriceSource
from priceprism.core.services.quality.coverage import build_control_record

logger = get_logger(__name__)


@dataclass(frozen=True)
class FetchResult:
    """Rows and control record produced by one task."""

    rows: pd.DataFrame
    control: ControlRecord
    from_cache: bool = False


@dataclass(frozen=True)
class PriceFetchTask:
    """Fetches one ticker's history and screens it against the benchmark.

    Download and cache failures never escape :meth:`run`; they surface as a
    ``NOT OK`` control record with zero rows. ``trace_id`` and ``log_fields``
    carry the batch's log context into worker threads or processes.
    """

    ticker: str
    source: PriceSource
    first_date: date
    last_date: date
    provider: PriceProvider
    cache: PriceCache | None = None
    calendar: frozenset[pd.Timestamp] = field(default_factory=frozenset)
    threshold: float = 0.0
    position: int = 1
    total: int = 1
    trace_id: str | None = None
    log_fields: tuple[tuple[str, Any], ...] = ()

    @property
    def cache_key(self) -> CacheKey:
        return CacheKey(self.ticker, self.source, self.first_date, self.last_date)

    def run(self) -> FetchResult:
        with log_context(trace_id=self.trace_id, **dict(self.log_fields)):
            return self._run()

    def _run(self) -> FetchResult:
        log = logger.bind(ticker=self.ticker, source=self.source.value)
        prefix = f"({self.position}/{self.total}) {self.ticker}"

        rows = self._read_cache(log)
        from_cache = rows is not None
        download_ok = True
        if rows is None:
            try:
                rows = self._download()
            except ProviderError as exc:
                log.bind(error_code=exc.error_code).warning(f"{prefix} | download failed: {exc.message}")
                rows = coerce_price_frame(None)
                download_ok = False
            else:
                self._write_cache(rows, log)

        control = build_control_record(
            ticker=self.ticker,
            source=self.source,
            first_date=self.first_date,
            last_date=self.last_date,
            rows=rows,
            calendar=self.calendar,
            threshold=self.threshold,
            download_ok=download_ok,
        )
        origin = "cache" if from_cache else self.provider.name
        log.info(
            f"{prefix} | {origin} | {control.total_obs} rows | "
            f"{control.coverage:.0%} of benchmark dates | {control.decision.value}"
        )
        return FetchResult(rows=rows, control=control, from_cache=from_cache)

    def _download(self) -> pd.DataFrame:
        """Fetch and coerce rows; any failure of the provider becomes a :class:`ProviderError`."""

        try:
            fetched = self.provider.fetch(self.ticker, self.first_date, self.last_date)
            return coerce_price_frame(fetched, ticker=self.ticker)
        except ProviderError:
            raise
        except Exception as exc:
            raise ProviderError(
                f"{self.provider.name} returned unusable data for {self.ticker}: {exc}",
                self.provider.name,
                details={"ticker": self.ticker},
            ) from exc

    def _read_cache(self, log) -> pd.DataFrame | None:
        if self.cache is None:
            return None
        try:
            return self.cache.get(self.cache_key)
        except CacheError as exc:
            log.warning(f"Ignoring unreadable cache entry: {exc.message}")
            return None

    def _write_cache(self, rows: pd.DataFrame, log) -> None:
        # empty downloads stay uncached so the next run retries them
        if self.cache is None or rows.empty:
            return
        try:
            self.cache.set(self.cache_key, rows)
        except CacheError as exc:
            log.warning(f"Could not cache rows: {exc.message}")


def run_fetch_task(task: PriceFetchTask) -> FetchResult:
    """Module-level entry point so executors can pickle the call."""

    return task.run()


__all__ = ["FetchResult", "PriceFetchTask", "run_fetch_task"]
