from __future__ import annotations

from datetime import date
from pathlib import Path

import duckdb
import pandas as pd
import pytest

from priceprism.core.data.cache import CacheKey, DuckDBPriceCache
from priceprism.core.exceptions import CacheError
from priceprism.core.models import PriceSource


def _key(ticker: str = "PETR4.SA", last: date = date(2024, 1, 31)) -> CacheKey:
    return CacheKey(ticker, PriceSource.YAHOO, date(2024, 1, 1), last)


def test_cache_key_is_stable_and_range_specific() -> None:
    assert _key().key == _key().key
    assert len(_key().key) == 16
    assert _key().key != _key(last=date(2024, 2, 1)).key
    assert str(_key()) == _key().key


def test_cache_key_filename_is_filesystem_safe() -> None:
    filename = CacheKey("^GSPC", PriceSource.YAHOO, date(2024, 1, 1), date(2024, 1, 31)).filename
    assert filename.startswith("GSPC_yahoo_2024-01-01_2024-01-31_")
    assert filename.endswith(".parquet")
    assert "^" not in filename


def test_missing_entry_is_a_miss(tmp_path: Path) -> None:
    assert DuckDBPriceCache(tmp_path).get(_key()) is None


def test_set_then_get_returns_same_rows(tmp_path: Path, price_frame) -> None:
    cache = DuckDBPriceCache(tmp_path / "nested")
    rows = price_frame("PETR4.SA", ["2024-01-02", "2024-01-03"], [30.5, None])

    cache.set(_key(), rows)
    cached = cache.get(_key())

    assert len(cache) == 1
    assert cached["ticker"].tolist() == ["PETR4.SA", "PETR4.SA"]
    assert cached["ref_date"].tolist() == [pd.Timestamp("2024-01-02"), pd.Timestamp("2024-01-03")]
    assert cached["price_close"].iloc[0] == 30.5
    assert pd.isna(cached["price_close"].iloc[1])
    # no staging files left behind
    assert [path.suffix for path in (tmp_path / "nested").iterdir()] == [".parquet"]


def test_set_overwrites_entry(tmp_path: Path, price_frame) -> None:
    cache = DuckDBPriceCache(tmp_path)
    cache.set(_key(), price_frame("PETR4.SA", ["2024-01-02"], [1.0]))
    cache.set(_key(), price_frame("PETR4.SA", ["2024-01-02"], [2.0]))

    assert len(cache) == 1
    assert cache.get(_key())["price_close"].tolist() == [2.0]


def test_delete_and_clear(tmp_path: Path, price_frame) -> None:
    cache = DuckDBPriceCache(tmp_path)
    cache.set(_key("A"), price_frame("A", ["2024-01-02"], [1.0]))
    cache.set(_key("B"), price_frame("B", ["2024-01-02"], [1.0]))

    assert cache.delete(_key("A")) is True
    assert cache.delete(_key("A")) is False
    assert len(cache) == 1

    cache.clear()
    assert len(cache) == 0


def test_corrupt_file_raises_cache_error(tmp_path: Path) -> None:
    cache = DuckDBPriceCache(tmp_path)
    cache.path_for(_key()).write_bytes(b"not a parquet file")

    with pytest.raises(CacheError):
        cache.get(_key())


def _write_foreign_parquet(path: Path) -> None:
    with duckdb.connect() as conn:
        conn.from_df(pd.DataFrame({"foo": [1]})).write_parquet(str(path))


def test_parquet_without_price_columns_raises_cache_error(tmp_path: Path) -> None:
    cache = DuckDBPriceCache(tmp_path)
    _write_foreign_parquet(cache.path_for(_key()))

    with pytest.raises(CacheError) as excinfo:
        cache.get(_key())

    assert "does not hold price rows" in excinfo.value.message
