"""Exception handling module."""

from priceprism.core.exceptions.base import (
    CacheError,
    ConfigurationError,
    ConfigurationIssue,
    PricePrismError,
    ProviderError,
)
from priceprism.core.exceptions.codes import ConfigurationErrorKind, ErrorCode

__all__ = [
    "PricePrismError",
    "ConfigurationError",
    "ConfigurationErrorKind",
    "ConfigurationIssue",
    "ProviderError",
    "CacheError",
    "ErrorCode",
]
