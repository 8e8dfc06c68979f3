"""配置管理模块 - 处理priceprism的默认配置"""

from __future__ import annotations

import os
import tomllib
from dataclasses import asdict, dataclass, field, replace
from datetime import date
from pathlib import Path
from typing import Any

from priceprism.core.config.batch import (
    DEFAULT_BENCH_TICKER,
    DEFAULT_CACHE_FOLDER,
    DEFAULT_THRESHOLD,
    BatchSettings,
)
from priceprism.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class CacheConfig:
    """缓存配置"""

    enabled: bool = True
    folder: str = DEFAULT_CACHE_FOLDER


@dataclass
class BatchDefaults:
    """批量下载默认参数"""

    bench_ticker: str = DEFAULT_BENCH_TICKER
    return_type: str = "arit"
    frequency: str = "daily"
    thresh_bad_data: float = DEFAULT_THRESHOLD
    do_complete_data: bool = False
    do_fill_missing_prices: bool = True


@dataclass
class LoggingConfig:
    """日志配置"""

    level: str = "INFO"
    file: str | None = None


@dataclass
class PricePrismConfig:
    """priceprism主配置"""

    cache: CacheConfig = field(default_factory=CacheConfig)
    batch: BatchDefaults = field(default_factory=BatchDefaults)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> PricePrismConfig:
        """从字典创建配置"""
        return cls(
            cache=CacheConfig(**config_dict.get("cache", {})),
            batch=BatchDefaults(**config_dict.get("batch", {})),
            logging=LoggingConfig(**config_dict.get("logging", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """转换为字典"""
        return {
            "cache": asdict(self.cache),
            "batch": asdict(self.batch),
            "logging": asdict(self.logging),
        }


def default_config_path() -> Path:
    return Path.home() / ".priceprism" / "config.toml"


class ConfigManager:
    """配置管理器

    Precedence, lowest first: built-in defaults, the TOML file, then
    ``PRICEPRISM_*`` environment variables.
    """

    def __init__(self, config_path: Path | None = None, environ: dict[str, str] | None = None):
        """初始化配置管理器

        Args:
            config_path: 配置文件路径，如果为None则使用默认路径
            environ: 环境变量映射，默认使用 ``os.environ``
        """
        self.config_path = config_path or default_config_path()
        self._environ = os.environ if environ is None else environ
        self.config = self._load_config()

    def _load_config(self) -> PricePrismConfig:
        """加载配置"""
        config_dict: dict[str, Any] = {}
        if self.config_path.exists():
            try:
                with open(self.config_path, "rb") as f:
                    config_dict = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                # 如果配置文件有问题，使用默认配置
                logger.warning(f"Failed to load config from {self.config_path}: {e}")
                config_dict = {}

        for section, values in load_config_from_env(self._environ).items():
            config_dict.setdefault(section, {}).update(values)

        try:
            return PricePrismConfig.from_dict(config_dict)
        except TypeError as e:
            logger.warning(f"Ignoring invalid configuration in {self.config_path}: {e}")
            return PricePrismConfig()

    def get_config(self) -> PricePrismConfig:
        """获取当前配置"""
        return self.config


def _env_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def load_config_from_env(environ: dict[str, str] | None = None) -> dict[str, dict[str, Any]]:
    """从环境变量加载配置"""
    env = os.environ if environ is None else environ
    config: dict[str, dict[str, Any]] = {}

    # 缓存配置
    cache_config: dict[str, Any] = {}
    if env.get("PRICEPRISM_CACHE_ENABLED") is not None:
        cache_config["enabled"] = _env_bool(env["PRICEPRISM_CACHE_ENABLED"])
    if env.get("PRICEPRISM_CACHE_FOLDER"):
        cache_config["folder"] = env["PRICEPRISM_CACHE_FOLDER"]
    if cache_config:
        config["cache"] = cache_config

    # 批量下载配置
    batch_config: dict[str, Any] = {}
    if env.get("PRICEPRISM_BENCH_TICKER"):
        batch_config["bench_ticker"] = env["PRICEPRISM_BENCH_TICKER"]
    if env.get("PRICEPRISM_THRESH_BAD_DATA"):
        try:
            batch_config["thresh_bad_data"] = float(env["PRICEPRISM_THRESH_BAD_DATA"])
        except ValueError:
            logger.warning(f"Ignoring non-numeric PRICEPRISM_THRESH_BAD_DATA={env['PRICEPRISM_THRESH_BAD_DATA']!r}")
    if batch_config:
        config["batch"] = batch_config

    # 日志配置
    logging_config: dict[str, Any] = {}
    if env.get("PRICEPRISM_LOGGING_LEVEL"):
        logging_config["level"] = env["PRICEPRISM_LOGGING_LEVEL"]
    if env.get("PRICEPRISM_LOGGING_FILE"):
        logging_config["file"] = env["PRICEPRISM_LOGGING_FILE"]
    if logging_config:
        config["logging"] = logging_config

    return config


def settings_from_config(
    config: PricePrismConfig,
    first_date: date | str | None = None,
    last_date: date | str | None = None,
    **overrides: Any,
) -> BatchSettings:
    """Build :class:`BatchSettings` from configured defaults plus explicit overrides."""

    settings = BatchSettings(
        bench_ticker=config.batch.bench_ticker,
        return_type=config.batch.return_type,
        frequency=config.batch.frequency,
        thresh_bad_data=config.batch.thresh_bad_data,
        do_complete_data=config.batch.do_complete_data,
        do_fill_missing_prices=config.batch.do_fill_missing_prices,
        do_cache=config.cache.enabled,
        cache_folder=config.cache.folder,
    )
    if first_date is not None:
        overrides["first_date"] = first_date
    if last_date is not None:
        overrides["last_date"] = last_date
    explicit = {key: value for key, value in overrides.items() if value is not None}
    return replace(settings, **explicit)


__all__ = [
    "BatchDefaults",
    "CacheConfig",
    "ConfigManager",
    "LoggingConfig",
    "PricePrismConfig",
    "default_config_path",
    "load_config_from_env",
    "settings_from_config",
]
