"""缓存策略和接口定义."""

from __future__ import annotations

from abc import ABC, abstractmethod

import pandas as pd

from priceprism.core.data.cache.key import CacheKey


class PriceCache(ABC):
    """缓存策略抽象基类."""

    @abstractmethod
    def get(self, key: CacheKey) -> pd.DataFrame | None:
        """Return the cached rows for ``key`` or ``None`` on a miss."""

    @abstractmethod
    def set(self, key: CacheKey, frame: pd.DataFrame) -> None:
        """Store ``frame`` under ``key``."""

    @abstractmethod
    def delete(self, key: CacheKey) -> bool:
        """删除缓存数据."""

    @abstractmethod
    def clear(self) -> None:
        """清空缓存."""
