from __future__ import annotations

"""PreferenceStore: selected display currency plus the refresh lifecycle.

Public surface used by the rest of the storefront:
    - currency / symbol        current selection
    - set_currency(code)       change + persist the selection (no refresh)
    - convert(amount, from_)   amount in the selected currency
    - format(amount, from_)    converted amount as a display string
    - subscribe(cb)            loading-state observer, returns unsubscribe

Construction only loads the saved selection. Callers must `start()` the store
(or enter `async with`) to get one immediate refresh of both stores, repeated
every `refresh_interval` seconds until `aclose()` cancels the loop and closes
an owned API client.
"""
import asyncio
import logging
from typing import Callable, Dict, Optional

from storefront.core.config import Settings, get_settings
from storefront.models.constants import BASE_CURRENCY, PREFERENCE_KEY
from .api_client import CurrencyApiClient
from .catalog import get_currency_symbol, normalize_currency_code
from .conversion import convert_amount
from .events import LoadingCallback, LoadingObservers
from .formatting import format_price
from .preferences import (
    InMemoryPreferenceStorage,
    PreferenceStorage,
    SqlitePreferenceStorage,
)
from .snapshot import ConversionContext
from .stores import MultiplierStore, RateStore

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL = 3600.0


class PreferenceStore:
    def __init__(
        self,
        rate_store: RateStore,
        multiplier_store: MultiplierStore,
        storage: Optional[PreferenceStorage] = None,
        *,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
        base_currency: str = BASE_CURRENCY,
        client: Optional[CurrencyApiClient] = None,
    ):
        if refresh_interval <= 0:
            raise ValueError("refresh_interval must be positive seconds")
        self._rate_store = rate_store
        self._multiplier_store = multiplier_store
        self._storage: PreferenceStorage = storage or InMemoryPreferenceStorage()
        self._interval = refresh_interval
        self._base_currency = base_currency
        self._observers = LoadingObservers()
        self._task: Optional[asyncio.Task] = None
        # closed by aclose(); only set when this store owns the client
        self._client = client
        self._currency = self._load_currency()

    def _load_currency(self) -> str:
        stored = self._storage.load(PREFERENCE_KEY)
        code = normalize_currency_code(stored)
        if code is None:
            if stored is not None:
                logger.warning("ignoring invalid stored currency %r", stored)
            return self._base_currency
        return code

    # Selection -------------------------------------------------
    @property
    def currency(self) -> str:
        return self._currency

    @property
    def base_currency(self) -> str:
        return self._base_currency

    @property
    def symbol(self) -> str:
        return get_currency_symbol(self._currency)

    def set_currency(self, code: str) -> None:
        normalized = normalize_currency_code(code)
        if normalized is None:
            raise ValueError(f"invalid currency code {code!r}")
        self._currency = normalized
        self._storage.save(PREFERENCE_KEY, normalized)
        logger.info("display currency selected", extra={"currency": normalized})

    # Conversion ------------------------------------------------
    def context(self) -> ConversionContext:
        return ConversionContext(
            currency=self._currency,
            rates=self._rate_store.snapshot,
            multipliers=self._multiplier_store.snapshot,
            base_currency=self._base_currency,
        )

    def convert(self, amount: float, from_currency: Optional[str] = None) -> float:
        ctx = self.context()
        return convert_amount(amount, from_currency or ctx.base_currency, ctx.currency, ctx)

    def format(self, amount: float, from_currency: Optional[str] = None) -> str:
        ctx = self.context()
        converted = convert_amount(amount, from_currency or ctx.base_currency, ctx.currency, ctx)
        return format_price(converted, ctx.currency)

    # Observers -------------------------------------------------
    def subscribe(self, callback: LoadingCallback) -> Callable[[], None]:
        return self._observers.subscribe(callback)

    # Refresh lifecycle -----------------------------------------
    async def refresh(self) -> Dict[str, bool]:
        """Refresh both stores concurrently; one failing never affects the other."""
        self._observers.notify(True, "Updating currency rates")
        try:
            results = await asyncio.gather(
                self._rate_store.refresh(),
                self._multiplier_store.refresh(),
                return_exceptions=True,
            )
        finally:
            self._observers.notify(False, None)
        outcome: Dict[str, bool] = {}
        for source, result in zip(("rates", "multipliers"), results):
            if isinstance(result, BaseException):
                logger.error(
                    "%s refresh raised", source, exc_info=result, extra={"source": source}
                )
                outcome[source] = False
            else:
                outcome[source] = bool(result)
        return outcome

    async def _run(self) -> None:
        while True:
            await self.refresh()
            await asyncio.sleep(self._interval)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name="currency-refresh"
        )

    async def aclose(self) -> None:
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        client, self._client = self._client, None
        if client is not None:
            await client.aclose()

    async def __aenter__(self) -> "PreferenceStore":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def build_preference_store(
    settings: Settings | None = None,
    client: CurrencyApiClient | None = None,
    storage: PreferenceStorage | None = None,
) -> PreferenceStore:
    """Wire stores, API client and SQLite preference file from settings.

    The returned store is not started; use `async with` or `start()`. A client
    created here is owned by the store and closed by `aclose()`; a passed-in
    client stays the caller's to close.
    """
    settings = settings or get_settings()
    owned: CurrencyApiClient | None = None
    if client is None:
        client = owned = CurrencyApiClient(
            settings.api_base_url, timeout=settings.http_timeout_seconds
        )
    if storage is None:
        storage = SqlitePreferenceStorage(settings.data_dir / settings.preference_filename)
    return PreferenceStore(
        RateStore(client.get_rates),
        MultiplierStore(client.get_multipliers, base_currency=settings.base_currency),
        storage,
        refresh_interval=settings.rates_refresh_interval_seconds,
        base_currency=settings.base_currency,
        client=owned,
    )
