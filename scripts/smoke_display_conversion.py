"""Smoke script for the display conversion pipeline.

Demonstrates, against an in-process backend with a temporary database:
 1. Admin creates a USD multiplier with a direct rate and an EUR multiplier without one.
 2. A PreferenceStore refreshes both stores through the REST client.
 3. Prices are converted/formatted for INR, USD (direct rate), EUR and GBP (generic table).

NOTE: This is a lightweight diagnostic and not a formal test.
"""

import asyncio
import tempfile
from pathlib import Path
from pprint import pprint

import httpx
from fastapi.testclient import TestClient

from storefront.core.config import Settings
from storefront.main import create_app
from storefront.services.currency import CurrencyApiClient, PreferenceStore, RateStore, MultiplierStore


async def run():
    out = {}
    with tempfile.TemporaryDirectory() as tmp:
        settings = Settings(data_dir=Path(tmp))
        settings.init_post_load()
        app = create_app(settings)

        admin = TestClient(app)
        admin.post("/api/admin/currency-multipliers", json={"currencyCode": "USD", "multiplier": 4, "rateToInr": 85})
        admin.post("/api/admin/currency-multipliers", json={"currencyCode": "EUR", "multiplier": 1.1})
        out["multipliers"] = admin.get("/currency/multipliers").json()

        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://storefront") as http:
            api = CurrencyApiClient(client=http)
            store = PreferenceStore(RateStore(api.get_rates), MultiplierStore(api.get_multipliers))
            out["refresh"] = await store.refresh()
            prices = {}
            for code in ("INR", "USD", "EUR", "GBP"):
                store.set_currency(code)
                prices[code] = {"convert": round(store.convert(300), 4), "format": store.format(300)}
            out["prices_for_300_inr"] = prices

    pprint(out)


if __name__ == "__main__":
    asyncio.run(run())
