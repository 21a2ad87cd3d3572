from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Dict, List, Optional


class CurrencyInfo(BaseModel):
    code: str
    name: str
    symbol: str
    rate: float = Field(..., gt=0)


class RatesResponse(BaseModel):
    """Generic FX table: units of each code per 1 unit of `base`."""

    model_config = ConfigDict(populate_by_name=True)

    base: str
    rates: Dict[str, float]
    currencies: List[CurrencyInfo]
    fetched_at: Optional[datetime] = Field(None, alias="fetchedAt")
