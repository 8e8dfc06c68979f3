"""Price provider abstraction."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

import pandas as pd

from priceprism.core.models.market import PriceSource


class PriceProvider(ABC):
    """数据提供商抽象基类.

    A provider knows how to download the daily price history of a single
    ticker. Implementations return frames shaped like
    :data:`priceprism.core.data.schema.PRICE_TABLE` and raise
    :class:`~priceprism.core.exceptions.ProviderError` when the download
    fails.
    """

    name: str
    source: PriceSource

    @abstractmethod
    def fetch(self, ticker: str, first_date: date, last_date: date) -> pd.DataFrame:
        """Return daily rows for ``ticker`` between both dates inclusive."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, source={self.source.value!r})"
