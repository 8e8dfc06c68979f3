"""缓存键生成和管理."""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from datetime import date

from priceprism.core.models.market import PriceSource

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True)
class CacheKey:
    """Identifies one cached price history: (ticker, source, date range)."""

    ticker: str
    source: PriceSource
    first_date: date
    last_date: date

    @property
    def key(self) -> str:
        """唯一的缓存键."""

        key_string = "|".join(
            [self.ticker, self.source.value, self.first_date.isoformat(), self.last_date.isoformat()]
        )
        return hashlib.sha256(key_string.encode()).hexdigest()[:16]

    @property
    def filename(self) -> str:
        """Readable file name; the hash keeps distinct tickers from colliding after slugging."""

        slug = _UNSAFE_CHARS.sub("_", self.ticker).strip("_") or "ticker"
        return (
            f"{slug}_{self.source.value}_{self.first_date.isoformat()}_"
            f"{self.last_date.isoformat()}_{self.key}.parquet"
        )

    def __str__(self) -> str:
        return self.key
