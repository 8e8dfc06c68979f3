"""Price history caching."""

from priceprism.core.data.cache.base import PriceCache
from priceprism.core.data.cache.duckdb import DuckDBPriceCache
from priceprism.core.data.cache.key import CacheKey

__all__ = ["CacheKey", "DuckDBPriceCache", "PriceCache"]
