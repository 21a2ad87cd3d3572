from __future__ import annotations

"""Concrete rate table providers and factory.

'static' serves a built-in table (offline / development). 'external-http'
pulls the latest INR-based table from `exchange_api_base_url`.
"""
from typing import Dict, Optional

import httpx

from storefront.core.config import get_settings
from storefront.services.http_client import get_json, HttpError
from storefront.services.currency.catalog import normalize_currency_code
from storefront.services.currency.snapshot import positive_number
from .base import RateTableProvider

STATIC_RATES: Dict[str, float] = {
    "INR": 1.0,
    "USD": 0.012,
    "EUR": 0.011,
    "GBP": 0.0095,
    "AED": 0.044,
    "AUD": 0.018,
    "CAD": 0.016,
    "SGD": 0.016,
    "MYR": 0.056,
    "JPY": 1.8,
}


class StaticRateTableProvider(RateTableProvider):
    async def fetch_table(self) -> Dict[str, float]:  # type: ignore[override]
        return dict(STATIC_RATES)


class ExternalHTTPRateTableProvider(RateTableProvider):
    """exchangerate-api style endpoint: GET {base_url}/INR -> {"rates": {...}}."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if base_url is None or timeout is None:
            settings = get_settings()
            base_url = base_url or str(settings.exchange_api_base_url)
            timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self._url = f"{base_url.rstrip('/')}/{self.base_currency}"
        self._timeout = timeout
        self._client = client

    async def fetch_table(self) -> Dict[str, float]:  # type: ignore[override]
        data = await get_json(self._url, client=self._client, timeout=self._timeout)
        raw = data.get("rates")
        if not isinstance(raw, dict):
            raise HttpError(f"No 'rates' object in response from {self._url}")
        table: Dict[str, float] = {}
        for key, value in raw.items():
            code = normalize_currency_code(key)
            rate = positive_number(value)
            if code and rate:
                table[code] = rate
        if not table:
            raise HttpError(f"Empty rate table from {self._url}")
        table[self.base_currency] = 1.0
        return table


_PROVIDER_REGISTRY = {
    "static": StaticRateTableProvider,
    "external-http": ExternalHTTPRateTableProvider,
}


def make_rate_provider(kind: str) -> RateTableProvider:
    cls = _PROVIDER_REGISTRY.get(kind)
    if not cls:
        raise ValueError(f"Unknown rate provider kind '{kind}'")
    return cls()
