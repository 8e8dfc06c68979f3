from __future__ import annotations

from datetime import date
from pathlib import Path

import duckdb
import pandas as pd

from priceprism.core.data.cache import CacheKey, DuckDBPriceCache, PriceCache
from priceprism.core.data.providers import StaticPriceProvider
from priceprism.core.exceptions import CacheError
from priceprism.core.models import Decision, DownloadStatus, PriceSource
from priceprism.core.services.fetch import PriceFetchTask, run_fetch_task

FIRST = date(2024, 1, 1)
LAST = date(2024, 5, 31)


class BrokenCache(PriceCache):
    cache_type = "broken"

    def get(self, key: CacheKey) -> pd.DataFrame | None:
        raise CacheError("unreadable", self.cache_type)

    def set(self, key: CacheKey, frame: pd.DataFrame) -> None:
        raise CacheError("read-only", self.cache_type)

    def delete(self, key: CacheKey) -> bool:
        return False

    def clear(self) -> None:
        return None


def _task(provider, ticker="A", cache=None, calendar=frozenset()) -> PriceFetchTask:
    return PriceFetchTask(
        ticker=ticker,
        source=PriceSource.YAHOO,
        first_date=FIRST,
        last_date=LAST,
        provider=provider,
        cache=cache,
        calendar=calendar,
        threshold=0.75,
    )


def test_download_is_screened_against_calendar(scenario_provider, trading_days) -> None:
    result = run_fetch_task(_task(scenario_provider, "B", calendar=frozenset(trading_days)))

    assert not result.from_cache
    assert len(result.rows) == 50
    assert result.control.coverage == 0.5
    assert result.control.decision is Decision.OUT
    assert result.control.download_status is DownloadStatus.OK


def test_failed_download_becomes_not_ok_record(trading_days) -> None:
    result = _task(StaticPriceProvider({}), "MISSING", calendar=frozenset(trading_days)).run()

    assert result.rows.empty
    assert result.control.download_status is DownloadStatus.NOT_OK
    assert result.control.decision is Decision.OUT
    assert result.control.total_obs == 0


def test_second_run_reads_from_cache(tmp_path: Path, scenario_provider) -> None:
    cache = DuckDBPriceCache(tmp_path)

    first = _task(scenario_provider, cache=cache).run()
    second = _task(scenario_provider, cache=cache).run()

    assert scenario_provider.calls == ["A"]
    assert second.from_cache
    pd.testing.assert_frame_equal(first.rows, second.rows)


def test_failed_download_is_not_cached(tmp_path: Path) -> None:
    cache = DuckDBPriceCache(tmp_path)

    _task(StaticPriceProvider({}), "MISSING", cache=cache).run()

    assert len(cache) == 0


def test_cache_failures_fall_back_to_download(scenario_provider) -> None:
    result = _task(scenario_provider, cache=BrokenCache()).run()

    assert not result.from_cache
    assert len(result.rows) == 100
    assert scenario_provider.calls == ["A"]


class DateColumnProvider(StaticPriceProvider):
    """Returns raw vendor columns instead of price rows."""

    def fetch(self, ticker, first_date, last_date) -> pd.DataFrame:
        self.calls.append(ticker)
        return pd.DataFrame({"Date": ["2024-01-02", "2024-01-03"], "Close": [10.0, 11.0]})


def test_unusable_provider_frame_becomes_not_ok_record(trading_days) -> None:
    result = _task(DateColumnProvider({}), "BAD", calendar=frozenset(trading_days)).run()

    assert result.rows.empty
    assert result.control.download_status is DownloadStatus.NOT_OK
    assert result.control.decision is Decision.OUT


def test_foreign_cache_file_is_downloaded_again(tmp_path: Path, scenario_provider) -> None:
    cache = DuckDBPriceCache(tmp_path)
    task = _task(scenario_provider, cache=cache)
    with duckdb.connect() as conn:
        conn.from_df(pd.DataFrame({"foo": [1]})).write_parquet(str(cache.path_for(task.cache_key)))

    result = task.run()

    assert not result.from_cache
    assert scenario_provider.calls == ["A"]
    assert len(result.rows) == 100
    # the download replaced the foreign file
    assert len(cache.get(task.cache_key)) == 100
