from __future__ import annotations

"""RateStore and MultiplierStore.

Both hold one immutable snapshot and replace it wholesale after a successful
fetch. A failed fetch (transport error, malformed payload) is logged and the
previous snapshot stays in place; there is no retry until the next refresh.
"""
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Generic, Mapping, TypeVar

from storefront.models.constants import BASE_CURRENCY
from storefront.services.http_client import HttpError
from .catalog import normalize_currency_code
from .snapshot import (
    NEUTRAL_MULTIPLIER,
    MultiplierEntry,
    MultiplierTable,
    RateTable,
    positive_number,
)

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[Mapping[str, Any]]]
SnapshotT = TypeVar("SnapshotT")


class PayloadError(ValueError):
    """Raised when a fetched payload does not have the expected shape."""


class _SnapshotStore(ABC, Generic[SnapshotT]):
    source: str = "store"

    def __init__(self, fetcher: Fetcher, initial: SnapshotT):
        self._fetcher = fetcher
        self._snapshot = initial

    @property
    def snapshot(self) -> SnapshotT:
        return self._snapshot

    @abstractmethod
    def _parse(self, payload: Mapping[str, Any], fetched_at: datetime) -> SnapshotT:
        raise NotImplementedError

    async def refresh(self) -> bool:
        """Fetch and install a new snapshot; return False (old one kept) on failure."""
        try:
            payload = await self._fetcher()
            if not isinstance(payload, Mapping):
                raise PayloadError(f"expected an object, got {type(payload).__name__}")
            snapshot = self._parse(payload, datetime.now(timezone.utc))
        except (HttpError, PayloadError) as e:
            logger.warning(
                "%s refresh failed, keeping previous snapshot: %s",
                self.source,
                e,
                extra={"source": self.source},
            )
            return False
        self._snapshot = snapshot
        return True


class RateStore(_SnapshotStore[RateTable]):
    """Cache of the generic exchange-rate table (`GET /currency/rates`)."""

    source = "rates"

    def __init__(self, fetcher: Fetcher):
        super().__init__(fetcher, RateTable.empty())

    def _parse(self, payload: Mapping[str, Any], fetched_at: datetime) -> RateTable:
        raw = payload.get("rates")
        if not isinstance(raw, Mapping):
            raise PayloadError("payload has no 'rates' object")
        rates: Dict[str, float] = {}
        for key, value in raw.items():
            code = normalize_currency_code(key)
            rate = positive_number(value)
            if code is None or rate is None:
                logger.debug("dropping unusable rate %r=%r", key, value)
                continue
            rates[code] = rate
        logger.info(
            "exchange rates refreshed", extra={"source": self.source, "count": len(rates)}
        )
        return RateTable(rates=rates, fetched_at=fetched_at)


class MultiplierStore(_SnapshotStore[MultiplierTable]):
    """Cache of admin multipliers and direct rates (`GET /currency/multipliers`)."""

    source = "multipliers"

    def __init__(self, fetcher: Fetcher, base_currency: str = BASE_CURRENCY):
        super().__init__(fetcher, MultiplierTable.empty(base_currency))
        self._base_currency = base_currency

    def _parse(self, payload: Mapping[str, Any], fetched_at: datetime) -> MultiplierTable:
        raw = payload.get("multipliers")
        if not isinstance(raw, Mapping):
            raise PayloadError("payload has no 'multipliers' object")
        entries: Dict[str, MultiplierEntry] = {}
        for key, value in raw.items():
            code = normalize_currency_code(key)
            if code is None:
                logger.debug("skipping multiplier with invalid code %r", key)
                continue
            entries[code] = self._ingest_entry(code, value)
        logger.info(
            "currency multipliers refreshed",
            extra={"source": self.source, "count": len(entries)},
        )
        return MultiplierTable(
            entries=entries, fetched_at=fetched_at, base_currency=self._base_currency
        )

    @staticmethod
    def _ingest_entry(code: str, value: Any) -> MultiplierEntry:
        # Invalid numbers fall back to "no adjustment" rather than failing the refresh.
        if not isinstance(value, Mapping):
            return MultiplierEntry(currency_code=code)
        multiplier = positive_number(value.get("multiplier"))
        rate_to_base = positive_number(value.get("rateToInr"))
        return MultiplierEntry(
            currency_code=code,
            multiplier=multiplier if multiplier is not None else NEUTRAL_MULTIPLIER,
            rate_to_base=rate_to_base,
        )
