"""Standardised error codes."""

from enum import Enum


class ErrorCode(str, Enum):
    """priceprism 错误代码枚举."""

    GENERAL_ERROR = "GENERAL_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    PROVIDER_ERROR = "PROVIDER_ERROR"
    CACHE_ERROR = "CACHE_ERROR"


class ConfigurationErrorKind(str, Enum):
    """Specific reasons a batch request is rejected before any I/O."""

    EMPTY_TICKERS = "EMPTY_TICKERS"
    NULL_TICKER = "NULL_TICKER"
    INVALID_DATE = "INVALID_DATE"
    DATE_ORDER = "DATE_ORDER"
    INVALID_RETURN_TYPE = "INVALID_RETURN_TYPE"
    INVALID_FREQUENCY = "INVALID_FREQUENCY"
    THRESHOLD_OUT_OF_RANGE = "THRESHOLD_OUT_OF_RANGE"
    DEPRECATED_SOURCE = "DEPRECATED_SOURCE"
    UNSUPPORTED_SOURCE = "UNSUPPORTED_SOURCE"
    PARALLEL_EXECUTOR_MISSING = "PARALLEL_EXECUTOR_MISSING"
    NO_CONNECTIVITY = "NO_CONNECTIVITY"


__all__ = ["ConfigurationErrorKind", "ErrorCode"]
