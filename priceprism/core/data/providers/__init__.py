"""数据提供商适配器框架."""

from priceprism.core.data.providers.base import PriceProvider
from priceprism.core.data.providers.registry import (
    ProviderRegistry,
    classify_source,
    create_default_registry,
)
from priceprism.core.data.providers.static import StaticPriceProvider
from priceprism.core.data.providers.yfinance import YFinanceProvider

__all__ = [
    "PriceProvider",
    "ProviderRegistry",
    "StaticPriceProvider",
    "YFinanceProvider",
    "classify_source",
    "create_default_registry",
]
