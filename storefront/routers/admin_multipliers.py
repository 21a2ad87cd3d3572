from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path
from typing import List

from storefront.core.config import Settings
from storefront.db.dal import Database, DuplicateCurrencyError
from storefront.models.multiplier import MultiplierIn, MultiplierOut, MultiplierUpdate
from .currency import get_app_settings, get_db

"""Admin CRUD for currency multipliers.

Endpoints (guarded by settings.enable_multiplier_admin):
    - GET    /api/admin/currency-multipliers         -> list rows
    - POST   /api/admin/currency-multipliers         -> create {currencyCode, multiplier, rateToInr?}
    - PUT    /api/admin/currency-multipliers/{id}    -> partial update; rateToInr=null clears it
    - DELETE /api/admin/currency-multipliers/{id}    -> remove row

Clearing rateToInr while keeping the row makes clients fall back to the
generic rate table for that currency (the multiplier still applies).
"""

router = APIRouter(prefix="/api/admin/currency-multipliers", tags=["admin"])


def require_admin_enabled(settings: Settings = Depends(get_app_settings)):
    if not settings.enable_multiplier_admin:
        raise HTTPException(status_code=403, detail="multiplier admin disabled")
    return True


@router.get("", response_model=List[MultiplierOut], summary="List currency multipliers")
async def list_multipliers(
    _: bool = Depends(require_admin_enabled),
    db: Database = Depends(get_db),
):
    return [MultiplierOut.from_row(r) for r in db.list_multipliers()]


@router.post(
    "",
    response_model=MultiplierOut,
    status_code=201,
    summary="Create a currency multiplier",
)
async def create_multiplier(
    payload: MultiplierIn,
    _: bool = Depends(require_admin_enabled),
    db: Database = Depends(get_db),
):
    try:
        row = db.create_multiplier(
            payload.currency_code, payload.multiplier, payload.rate_to_inr
        )
    except DuplicateCurrencyError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return MultiplierOut.from_row(row)


@router.put(
    "/{multiplier_id}", response_model=MultiplierOut, summary="Update a currency multiplier"
)
async def update_multiplier(
    payload: MultiplierUpdate,
    multiplier_id: int = Path(..., ge=1),
    _: bool = Depends(require_admin_enabled),
    db: Database = Depends(get_db),
):
    changes = {}
    if payload.currency_code is not None:
        changes["currency_code"] = payload.currency_code
    if payload.multiplier is not None:
        changes["multiplier"] = payload.multiplier
    if "rate_to_inr" in payload.model_fields_set:
        changes["rate_to_inr"] = payload.rate_to_inr
    try:
        row = db.update_multiplier(multiplier_id, **changes)
    except DuplicateCurrencyError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    if row is None:
        raise HTTPException(status_code=404, detail="multiplier not found")
    return MultiplierOut.from_row(row)


@router.delete("/{multiplier_id}", summary="Delete a currency multiplier")
async def delete_multiplier(
    multiplier_id: int = Path(..., ge=1),
    _: bool = Depends(require_admin_enabled),
    db: Database = Depends(get_db),
):
    if not db.delete_multiplier(multiplier_id):
        raise HTTPException(status_code=404, detail="multiplier not found")
    return {"status": "deleted", "id": multiplier_id}
