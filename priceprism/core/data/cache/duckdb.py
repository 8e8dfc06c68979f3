"""DuckDB缓存实现."""

from __future__ import annotations

import os
from pathlib import Path
from uuid import uuid4

import duckdb
import pandas as pd

from priceprism.core.data.cache.base import PriceCache
from priceprism.core.data.cache.key import CacheKey
from priceprism.core.data.schema import coerce_price_frame
from priceprism.core.exceptions import CacheError


class DuckDBPriceCache(PriceCache):
    """基于DuckDB的持久化缓存, 每个缓存键对应一个 parquet 文件.

    Every key owns its own file, so tasks fetching distinct tickers never
    touch the same entry and need no locking.
    """

    cache_type = "duckdb-parquet"

    def __init__(self, folder: str | os.PathLike[str]) -> None:
        self.folder = Path(folder)

    def path_for(self, key: CacheKey) -> Path:
        return self.folder / key.filename

    def get(self, key: CacheKey) -> pd.DataFrame | None:
        """从缓存获取数据."""
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            with duckdb.connect() as conn:
                frame = conn.read_parquet(str(path)).df()
            return coerce_price_frame(frame)
        except duckdb.Error as exc:
            raise CacheError(f"Unable to read cache file {path}: {exc}", self.cache_type) from exc
        except (TypeError, ValueError) as exc:
            # readable parquet with a foreign or stale layout
            raise CacheError(f"Cache file {path} does not hold price rows: {exc}", self.cache_type) from exc

    def set(self, key: CacheKey, frame: pd.DataFrame) -> None:
        """设置缓存数据."""
        self.folder.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        staging = path.with_name(f".{path.name}.{uuid4().hex}.tmp")
        try:
            with duckdb.connect() as conn:
                conn.from_df(coerce_price_frame(frame)).write_parquet(str(staging))
            os.replace(staging, path)
        except (duckdb.Error, OSError) as exc:
            staging.unlink(missing_ok=True)
            raise CacheError(f"Unable to write cache file {path}: {exc}", self.cache_type) from exc

    def delete(self, key: CacheKey) -> bool:
        """删除缓存数据."""
        path = self.path_for(key)
        if not path.exists():
            return False
        path.unlink()
        return True

    def clear(self) -> None:
        """清空缓存."""
        if not self.folder.exists():
            return
        for path in self.folder.glob("*.parquet"):
            path.unlink()

    def __len__(self) -> int:
        if not self.folder.exists():
            return 0
        return sum(1 for _ in self.folder.glob("*.parquet"))


__all__ = ["DuckDBPriceCache"]
