"""Configuration: batch settings and configured defaults."""

from priceprism.core.config.batch import (
    BatchRequest,
    BatchSettings,
    collect_configuration_issues,
    parse_date,
    resolve_batch_request,
)
from priceprism.core.config.settings import (
    BatchDefaults,
    CacheConfig,
    ConfigManager,
    LoggingConfig,
    PricePrismConfig,
    load_config_from_env,
    settings_from_config,
)

__all__ = [
    "BatchDefaults",
    "BatchRequest",
    "BatchSettings",
    "CacheConfig",
    "ConfigManager",
    "LoggingConfig",
    "PricePrismConfig",
    "collect_configuration_issues",
    "load_config_from_env",
    "parse_date",
    "resolve_batch_request",
    "settings_from_config",
]
