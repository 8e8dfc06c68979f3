"""Internet connectivity probe run once before a batch starts."""

from __future__ import annotations

import httpx

from priceprism.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_PROBE_URL = "https://finance.yahoo.com"


def has_internet(url: str = DEFAULT_PROBE_URL, timeout: float = 5.0) -> bool:
    """Return True when ``url`` answers, whatever the status code."""

    try:
        httpx.head(url, timeout=timeout, follow_redirects=False)
    except httpx.HTTPError as exc:
        logger.warning(f"Connectivity probe to {url} failed: {exc}")
        return False
    return True


__all__ = ["DEFAULT_PROBE_URL", "has_internet"]
