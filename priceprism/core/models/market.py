"""Market-related enums and types."""

from __future__ import annotations

from enum import Enum


class PriceSource(str, Enum):
    """价格数据来源枚举."""

    YAHOO = "yahoo"
    GOOGLE = "google"

    @property
    def deprecated(self) -> bool:
        """Google stopped serving price history; tickers routed there are rejected."""

        return self is PriceSource.GOOGLE


class ReturnType(str, Enum):
    """收益率类型枚举."""

    ARITHMETIC = "arit"
    LOG = "log"

    @classmethod
    def _missing_(cls, value: object) -> ReturnType | None:
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized in {"arit", "arithmetic"}:
                return cls.ARITHMETIC
            if normalized in {"log", "logarithmic"}:
                return cls.LOG
        return None


class Frequency(str, Enum):
    """数据频率枚举."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def _missing_(cls, value: object) -> Frequency | None:
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        return None


__all__ = ["Frequency", "PriceSource", "ReturnType"]
