from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

from .constants import BASE_CURRENCY


def _normalize_code(v: str) -> str:
    code = (v or "").strip().upper()
    if len(code) != 3 or not code.isascii() or not code.isalpha():
        raise ValueError("currency code must be 3 letters")
    return code


class MultiplierIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    currency_code: str = Field(..., alias="currencyCode")
    multiplier: float = Field(..., gt=0, allow_inf_nan=False)
    rate_to_inr: Optional[float] = Field(
        None,
        alias="rateToInr",
        gt=0,
        allow_inf_nan=False,
        description="1 unit of currency = rateToInr units of the base currency",
    )

    @field_validator("currency_code")
    @classmethod
    def valid_currency(cls, v: str) -> str:
        return _normalize_code(v)


class MultiplierUpdate(BaseModel):
    """Partial update; an explicit `rateToInr: null` clears the direct rate."""

    model_config = ConfigDict(populate_by_name=True)

    currency_code: Optional[str] = Field(None, alias="currencyCode")
    multiplier: Optional[float] = Field(None, gt=0, allow_inf_nan=False)
    rate_to_inr: Optional[float] = Field(None, alias="rateToInr", gt=0, allow_inf_nan=False)

    @field_validator("currency_code")
    @classmethod
    def valid_currency(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _normalize_code(v)


class MultiplierOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    currency_code: str = Field(..., alias="currencyCode")
    multiplier: float
    rate_to_inr: Optional[float] = Field(None, alias="rateToInr")
    is_base: bool = Field(False, alias="isBase")
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")

    @classmethod
    def from_row(cls, row: dict) -> "MultiplierOut":
        return cls(
            id=row["id"],
            currency_code=row["currency_code"],
            multiplier=row["multiplier"],
            rate_to_inr=row["rate_to_inr"],
            is_base=row["currency_code"] == BASE_CURRENCY,
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
