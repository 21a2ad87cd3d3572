from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Dict, Optional

from storefront.core.config import Settings, get_settings
from storefront.services.http_client import HttpError
from .base import RateTableProvider
from .providers import STATIC_RATES, make_rate_provider

"""Server-side cache of the generic FX table.

Purpose:
    Serve `GET /currency/rates` without hitting the upstream provider on every
    request. The whole table is cached for `rates_cache_ttl_seconds`.

Failure policy:
    - Upstream failure with a previously cached table -> keep serving it
      (stale), and try again on the next request after a short cooldown.
    - Upstream failure with nothing cached -> serve the static table so
      clients always receive something usable.
"""

logger = logging.getLogger(__name__)

FAILURE_COOLDOWN = timedelta(minutes=5)


@dataclass(frozen=True)
class CachedRateTable:
    rates: Dict[str, float]
    fetched_at: datetime
    stale: bool = False


class RateTableCacheService:
    def __init__(self, provider: RateTableProvider, ttl_seconds: int):
        self._provider = provider
        self._ttl = timedelta(seconds=ttl_seconds)
        self._cached: Optional[CachedRateTable] = None
        self._next_refresh: Optional[datetime] = None

    @property
    def base_currency(self) -> str:
        return self._provider.base_currency

    def _due(self, now: datetime) -> bool:
        return self._next_refresh is None or now >= self._next_refresh

    async def get_table(self) -> CachedRateTable:
        now = datetime.now(timezone.utc)
        if self._cached is not None and not self._due(now):
            return self._cached
        try:
            rates = await self._provider.fetch_table()
        except HttpError as e:
            logger.warning("rate provider failed: %s", e, extra={"source": "rates"})
            self._next_refresh = now + FAILURE_COOLDOWN
            if self._cached is None:
                self._cached = CachedRateTable(dict(STATIC_RATES), now, stale=True)
            elif not self._cached.stale:
                self._cached = CachedRateTable(self._cached.rates, self._cached.fetched_at, stale=True)
            return self._cached
        self._cached = CachedRateTable(rates, now)
        self._next_refresh = now + self._ttl
        logger.info(
            "rate table refreshed", extra={"source": "rates", "count": len(rates)}
        )
        return self._cached


def build_rate_table_service(settings: Settings) -> RateTableCacheService:
    return RateTableCacheService(
        make_rate_provider(settings.exchange_rate_provider),
        settings.rates_cache_ttl_seconds,
    )


# Process-wide instance for the default settings
@lru_cache
def get_rate_table_service() -> RateTableCacheService:
    return build_rate_table_service(get_settings())
