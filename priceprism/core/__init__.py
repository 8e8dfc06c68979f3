"""priceprism 核心模块"""

from priceprism.core.config.batch import BatchSettings
from priceprism.core.exceptions import ConfigurationError, PricePrismError
from priceprism.core.models.market import Frequency, PriceSource, ReturnType
from priceprism.core.services.batch import BatchOrchestrator, BatchResult, batch_get_prices

__all__ = [
    "BatchOrchestrator",
    "BatchResult",
    "BatchSettings",
    "ConfigurationError",
    "Frequency",
    "PricePrismError",
    "PriceSource",
    "ReturnType",
    "batch_get_prices",
]
