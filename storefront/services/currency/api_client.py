from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from storefront.core.config import get_settings
from storefront.services.http_client import get_json

RATES_PATH = "/currency/rates"
MULTIPLIERS_PATH = "/currency/multipliers"


class CurrencyApiClient:
    """Async client for the two currency read endpoints.

    Pass `client` to share a connection pool or to route requests through a
    test transport; otherwise an AsyncClient bound to `base_url` is created and
    owned (closed by `aclose`).
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if timeout is None or (client is None and base_url is None):
            settings = get_settings()
            timeout = timeout if timeout is not None else settings.http_timeout_seconds
            base_url = base_url or settings.api_base_url
        self._timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def get_rates(self) -> Dict[str, Any]:
        return await get_json(RATES_PATH, client=self._client, timeout=self._timeout)

    async def get_multipliers(self) -> Dict[str, Any]:
        return await get_json(MULTIPLIERS_PATH, client=self._client, timeout=self._timeout)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "CurrencyApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
