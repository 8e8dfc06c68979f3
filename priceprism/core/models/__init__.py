"""Domain models."""

from priceprism.core.models.control import (
    CONTROL_COLUMNS,
    ControlRecord,
    Decision,
    DownloadStatus,
    control_frame,
)
from priceprism.core.models.market import Frequency, PriceSource, ReturnType

__all__ = [
    "CONTROL_COLUMNS",
    "ControlRecord",
    "Decision",
    "DownloadStatus",
    "Frequency",
    "PriceSource",
    "ReturnType",
    "control_frame",
]
