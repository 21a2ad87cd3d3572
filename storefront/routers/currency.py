from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from typing import Any, Dict

from storefront.core.config import Settings
from storefront.db.dal import Database
from storefront.models.rates import RatesResponse
from storefront.services.currency.catalog import list_currencies
from storefront.services.rates.cache_service import RateTableCacheService

"""Public currency endpoints read by storefront clients.

    - GET /currency/rates        -> generic FX table (units per 1 INR) + selector listing
    - GET /currency/multipliers  -> admin multipliers / direct rates keyed by code

No conversion happens here; clients combine both payloads for display.
"""

router = APIRouter(prefix="/currency", tags=["currency"])


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(settings: Settings = Depends(get_app_settings)) -> Database:
    return Database(settings.db_path)


def get_rate_service(request: Request) -> RateTableCacheService:
    return request.app.state.rate_service


@router.get(
    "/rates",
    response_model=RatesResponse,
    response_model_by_alias=True,
    summary="Generic exchange-rate table",
)
async def get_rates(svc: RateTableCacheService = Depends(get_rate_service)):
    table = await svc.get_table()
    return RatesResponse(
        base=svc.base_currency,
        rates=table.rates,
        currencies=list_currencies(table.rates, svc.base_currency),
        fetched_at=table.fetched_at,
    )


@router.get("/multipliers", summary="Admin-configured currency multipliers")
async def get_multipliers(db: Database = Depends(get_db)) -> Dict[str, Any]:
    multipliers: Dict[str, Dict[str, float]] = {}
    for code, row in db.multiplier_map().items():
        entry = {"multiplier": row["multiplier"]}
        if row["rate_to_inr"] is not None:
            entry["rateToInr"] = row["rate_to_inr"]
        multipliers[code] = entry
    return {"multipliers": multipliers}
