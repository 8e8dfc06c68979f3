"""Ticker source classification and provider lookup."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from priceprism.core.data.providers.base import PriceProvider
from priceprism.core.data.providers.yfinance import YFinanceProvider
from priceprism.core.models.market import PriceSource

# Google Finance tickers carry an exchange prefix, e.g. ``NASDAQ:AAPL``
GOOGLE_MARKER = ":"


def classify_source(ticker: str) -> PriceSource:
    """Infer the price source of ``ticker`` from its naming convention."""

    if GOOGLE_MARKER in ticker:
        return PriceSource.GOOGLE
    return PriceSource.YAHOO


class ProviderRegistry:
    """Maps each price source to the provider serving it."""

    def __init__(self, providers: Iterable[PriceProvider] | Mapping[PriceSource, PriceProvider] = ()) -> None:
        self._providers: dict[PriceSource, PriceProvider] = {}
        if isinstance(providers, Mapping):
            for source, provider in providers.items():
                self.register(provider, source=source)
        else:
            for provider in providers:
                self.register(provider)

    def register(self, provider: PriceProvider, *, source: PriceSource | None = None) -> None:
        self._providers[source or provider.source] = provider

    def get(self, source: PriceSource) -> PriceProvider | None:
        return self._providers.get(source)

    def supports(self, source: PriceSource) -> bool:
        return source in self._providers

    @property
    def sources(self) -> frozenset[PriceSource]:
        return frozenset(self._providers)


def create_default_registry() -> ProviderRegistry:
    """Registry wired to the live Yahoo Finance provider."""

    return ProviderRegistry([YFinanceProvider()])


__all__ = ["GOOGLE_MARKER", "ProviderRegistry", "classify_source", "create_default_registry"]
