"""Pipeline services: fetching, quality screening, completion, resampling and returns."""

from priceprism.core.services.batch import BatchOrchestrator, BatchResult, batch_get_prices
from priceprism.core.services.completion import complete_panel, fill_missing_prices
from priceprism.core.services.fetch import FetchResult, PriceFetchTask, run_fetch_task
from priceprism.core.services.resampling import resample_prices
from priceprism.core.services.returns import compute_returns

__all__ = [
    "BatchOrchestrator",
    "BatchResult",
    "FetchResult",
    "PriceFetchTask",
    "batch_get_prices",
    "complete_panel",
    "compute_returns",
    "fill_missing_prices",
    "resample_prices",
    "run_fetch_task",
]
