"""priceprism - 批量金融价格数据获取库

Downloads daily price histories for many tickers at once, screens each one
against a benchmark calendar and returns a long-format panel together with a
per-ticker control report.

Examples:
    >>> import priceprism
    >>> result = priceprism.batch_get_prices(
    ...     ["AAPL", "MSFT"],
    ...     first_date="2024-01-01",
    ...     last_date="2024-03-31",
    ...     frequency="weekly",
    ... )  # doctest: +SKIP
    >>> result.control  # doctest: +SKIP
"""

from priceprism.core import (
    BatchOrchestrator,
    BatchResult,
    BatchSettings,
    ConfigurationError,
    Frequency,
    PricePrismError,
    PriceSource,
    ReturnType,
    batch_get_prices,
)
from priceprism.core.data.providers import classify_source

__version__ = "0.1.0"

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
    "classify_source",
]
