"""priceprism核心异常类."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from priceprism.core.exceptions.codes import ConfigurationErrorKind, ErrorCode


class PricePrismError(Exception):
    """priceprism基础异常类."""

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.GENERAL_ERROR.value,
        details: dict[str, Any] | None = None,
    ):
        """初始化异常.

        Args:
            message: 错误消息
            error_code: 错误代码
            details: 额外详情
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


@dataclass(frozen=True)
class ConfigurationIssue:
    """A single problem found while validating a batch request."""

    kind: ConfigurationErrorKind
    field: str
    message: str

    def to_payload(self) -> dict[str, str]:
        return {"kind": self.kind.value, "field": self.field, "message": self.message}


class ConfigurationError(PricePrismError):
    """批量请求配置错误, 在任何网络或缓存访问之前抛出."""

    def __init__(
        self,
        issues: Sequence[ConfigurationIssue],
        details: dict[str, Any] | None = None,
    ):
        if not issues:
            raise ValueError("ConfigurationError requires at least one issue")
        self.issues = tuple(issues)
        message = "; ".join(issue.message for issue in self.issues)
        super_details = details or {}
        super_details["issues"] = [issue.to_payload() for issue in self.issues]
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR.value, super_details)

    @property
    def kind(self) -> ConfigurationErrorKind:
        """The kind of the first detected issue."""

        return self.issues[0].kind

    @property
    def kinds(self) -> frozenset[ConfigurationErrorKind]:
        return frozenset(issue.kind for issue in self.issues)


class ProviderError(PricePrismError):
    """数据提供商相关异常."""

    def __init__(
        self,
        message: str,
        provider_name: str,
        error_code: str = ErrorCode.PROVIDER_ERROR.value,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        super_details.setdefault("provider", provider_name)
        super().__init__(message, error_code, super_details)
        self.provider_name = provider_name


class CacheError(PricePrismError):
    """缓存相关异常."""

    def __init__(
        self,
        message: str,
        cache_type: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if cache_type:
            super_details["cache_type"] = cache_type
        super().__init__(message, ErrorCode.CACHE_ERROR.value, super_details)
