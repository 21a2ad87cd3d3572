import asyncio

import pytest

from storefront.core.config import Settings
from storefront.models.constants import PREFERENCE_KEY
from storefront.services.currency.api_client import CurrencyApiClient
from storefront.services.currency.preference_store import (
    PreferenceStore,
    build_preference_store,
)
from storefront.services.currency.preferences import (
    InMemoryPreferenceStorage,
    SqlitePreferenceStorage,
)
from storefront.services.currency.stores import MultiplierStore, RateStore
from storefront.services.http_client import HttpError
from tests.helpers import ScriptedFetcher

RATES = {"rates": {"USD": 0.012, "EUR": 0.011, "GBP": 0.0095}}
MULTIPLIERS = {"multipliers": {"USD": {"multiplier": 4, "rateToInr": 85}}}


def make_store(rates_fetcher, multipliers_fetcher, storage=None, **kwargs) -> PreferenceStore:
    return PreferenceStore(
        RateStore(rates_fetcher),
        MultiplierStore(multipliers_fetcher),
        storage or InMemoryPreferenceStorage(),
        **kwargs,
    )


def test_default_currency_is_base() -> None:
    store = make_store(ScriptedFetcher(RATES), ScriptedFetcher(MULTIPLIERS))
    assert store.currency == "INR"
    assert store.symbol == "₹"


@pytest.mark.parametrize("stored,expected", [("usd", "USD"), ("rupees", "INR"), ("", "INR")])
def test_stored_preference_is_normalized_or_ignored(stored, expected) -> None:
    storage = InMemoryPreferenceStorage({PREFERENCE_KEY: stored})
    store = make_store(ScriptedFetcher(RATES), ScriptedFetcher(MULTIPLIERS), storage)
    assert store.currency == expected


def test_set_currency_persists_without_refreshing() -> None:
    rates, multipliers = ScriptedFetcher(RATES), ScriptedFetcher(MULTIPLIERS)
    storage = InMemoryPreferenceStorage()
    store = make_store(rates, multipliers, storage)
    store.set_currency("gbp")
    assert store.currency == "GBP"
    assert storage.load(PREFERENCE_KEY) == "GBP"
    assert rates.calls == 0 and multipliers.calls == 0


def test_set_currency_rejects_invalid_code() -> None:
    store = make_store(ScriptedFetcher(RATES), ScriptedFetcher(MULTIPLIERS))
    store.set_currency("EUR")
    with pytest.raises(ValueError):
        store.set_currency("euro")
    assert store.currency == "EUR"


def test_sqlite_preference_survives_new_store(tmp_path) -> None:
    path = tmp_path / "prefs.sqlite3"
    first = make_store(ScriptedFetcher(RATES), ScriptedFetcher(MULTIPLIERS), SqlitePreferenceStorage(path))
    first.set_currency("USD")
    first.set_currency("EUR")
    second = make_store(ScriptedFetcher(RATES), ScriptedFetcher(MULTIPLIERS), SqlitePreferenceStorage(path))
    assert second.currency == "EUR"


def test_convert_before_any_refresh_returns_base_amount() -> None:
    store = make_store(ScriptedFetcher(RATES), ScriptedFetcher(MULTIPLIERS))
    store.set_currency("USD")
    assert store.convert(300) == 300
    assert store.format(300) == "$300.00"


@pytest.mark.asyncio
async def test_refresh_then_convert_and_format() -> None:
    store = make_store(ScriptedFetcher(RATES), ScriptedFetcher(MULTIPLIERS))
    assert await store.refresh() == {"rates": True, "multipliers": True}
    store.set_currency("USD")
    assert store.convert(300) == pytest.approx(300 * 4 / 85)
    assert store.format(300) == "$14.12"
    store.set_currency("INR")
    assert store.convert(300) == 300
    assert store.format(1234.5) == "1,234.50 ₹"


@pytest.mark.asyncio
async def test_gbp_end_to_end_with_only_generic_table() -> None:
    store = make_store(
        ScriptedFetcher({"rates": {"GBP": 0.0095}}), ScriptedFetcher({"multipliers": {}})
    )
    await store.refresh()
    store.set_currency("GBP")
    assert store.convert(1000, "INR") == pytest.approx(9.5)
    assert store.format(1000) == "£9.50"


@pytest.mark.asyncio
async def test_never_populated_table_labels_base_amount_with_target_symbol() -> None:
    store = make_store(
        ScriptedFetcher(HttpError("down")),
        ScriptedFetcher({"multipliers": {"USD": {"multiplier": 4}}}),
    )
    await store.refresh()
    store.set_currency("USD")
    assert store.format(300) == "$1,200.00"


@pytest.mark.asyncio
async def test_rate_failure_does_not_touch_multipliers() -> None:
    rates = ScriptedFetcher(RATES, HttpError("rates down"))
    multipliers = ScriptedFetcher(
        MULTIPLIERS, {"multipliers": {"USD": {"multiplier": 2, "rateToInr": 80}}}
    )
    store = make_store(rates, multipliers)
    await store.refresh()
    rates_before = store.context().rates

    assert await store.refresh() == {"rates": False, "multipliers": True}
    ctx = store.context()
    assert ctx.rates is rates_before
    assert ctx.rates.rate_for("EUR") == 0.011
    assert ctx.multipliers.multiplier_for("USD") == 2
    assert ctx.multipliers.rate_to_base_for("USD") == 80


@pytest.mark.asyncio
async def test_multiplier_failure_does_not_touch_rates() -> None:
    rates = ScriptedFetcher(RATES, {"rates": {"EUR": 0.012}})
    multipliers = ScriptedFetcher(MULTIPLIERS, HttpError("multipliers down"))
    store = make_store(rates, multipliers)
    await store.refresh()

    assert await store.refresh() == {"rates": True, "multipliers": False}
    ctx = store.context()
    assert dict(ctx.rates.rates) == {"EUR": 0.012}
    assert ctx.multipliers.multiplier_for("USD") == 4
    assert ctx.multipliers.rate_to_base_for("USD") == 85


@pytest.mark.asyncio
async def test_unexpected_fetch_error_is_isolated() -> None:
    store = make_store(ScriptedFetcher(RuntimeError("boom")), ScriptedFetcher(MULTIPLIERS))
    assert await store.refresh() == {"rates": False, "multipliers": True}
    assert store.context().multipliers.multiplier_for("USD") == 4


@pytest.mark.asyncio
async def test_loading_observers_are_notified_and_can_unsubscribe() -> None:
    store = make_store(ScriptedFetcher(RATES), ScriptedFetcher(MULTIPLIERS))
    seen, other = [], []

    def broken(loading, message):
        raise RuntimeError("observer bug")

    unsubscribe = store.subscribe(lambda loading, message: seen.append(loading))
    store.subscribe(broken)
    store.subscribe(lambda loading, message: other.append((loading, message)))

    await store.refresh()
    assert seen == [True, False]
    assert other[0][0] is True and other[1] == (False, None)

    unsubscribe()
    unsubscribe()
    await store.refresh()
    assert seen == [True, False]
    assert len(other) == 4


@pytest.mark.asyncio
async def test_refresh_loop_runs_immediately_and_periodically_until_closed() -> None:
    ticks = asyncio.Event()
    rates = ScriptedFetcher(RATES)

    async def counting_rates():
        payload = await rates()
        if rates.calls >= 3:
            ticks.set()
        return payload

    store = make_store(counting_rates, ScriptedFetcher(MULTIPLIERS), refresh_interval=0.01)
    store.start()
    store.start()
    assert store.running
    await asyncio.wait_for(ticks.wait(), timeout=2)
    await store.aclose()
    assert not store.running

    calls_after_close = rates.calls
    await asyncio.sleep(0.05)
    assert rates.calls == calls_after_close


@pytest.mark.asyncio
async def test_context_manager_starts_and_cancels_loop() -> None:
    rates = ScriptedFetcher(RATES)
    async with make_store(rates, ScriptedFetcher(MULTIPLIERS), refresh_interval=3600) as store:
        assert store.running
        for _ in range(10):
            await asyncio.sleep(0)
    assert not store.running
    assert rates.calls == 1


def test_refresh_interval_must_be_positive() -> None:
    with pytest.raises(ValueError):
        make_store(ScriptedFetcher(RATES), ScriptedFetcher(MULTIPLIERS), refresh_interval=0)


@pytest.mark.asyncio
async def test_factory_client_uses_settings_and_is_closed_on_aclose(tmp_path) -> None:
    settings = Settings(data_dir=tmp_path, http_timeout_seconds=0.5, _env_file=None)
    store = build_preference_store(settings, storage=InMemoryPreferenceStorage())
    client = store._client
    assert client is not None
    assert client._timeout == 0.5
    await store.aclose()
    assert client._client.is_closed
    await store.aclose()


@pytest.mark.asyncio
async def test_factory_leaves_caller_client_open(tmp_path) -> None:
    settings = Settings(data_dir=tmp_path, _env_file=None)
    client = CurrencyApiClient("http://currency.test", timeout=1.0)
    store = build_preference_store(settings, client=client, storage=InMemoryPreferenceStorage())
    await store.aclose()
    assert not client._client.is_closed
    await client.aclose()
    assert client._client.is_closed
