from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Optional

from storefront.models.constants import BASE_CURRENCY

"""Immutable snapshots read by the conversion engine.

Stores build a new snapshot on every successful refresh and swap the reference
in one assignment; nothing mutates a snapshot after construction, so a reader
holding one always sees a consistent table.
"""

NEUTRAL_MULTIPLIER = 1.0


def positive_number(value: Any) -> Optional[float]:
    """Return `value` as float if it is a finite number > 0, else None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def _frozen(mapping: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class RateTable:
    """Generic FX table: units of `code` per 1 unit of the base currency."""

    rates: Mapping[str, float] = field(default_factory=lambda: _frozen(None))
    fetched_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "rates", _frozen(self.rates))

    @classmethod
    def empty(cls) -> "RateTable":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.rates

    def rate_for(self, currency: str) -> Optional[float]:
        return self.rates.get(currency)


@dataclass(frozen=True)
class MultiplierEntry:
    currency_code: str
    multiplier: float = NEUTRAL_MULTIPLIER
    rate_to_base: Optional[float] = None


@dataclass(frozen=True)
class MultiplierTable:
    entries: Mapping[str, MultiplierEntry] = field(default_factory=lambda: _frozen(None))
    fetched_at: Optional[datetime] = None
    base_currency: str = BASE_CURRENCY

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", _frozen(self.entries))

    @classmethod
    def empty(cls, base_currency: str = BASE_CURRENCY) -> "MultiplierTable":
        return cls(base_currency=base_currency)

    def multiplier_for(self, currency: str) -> float:
        # Base currency is never uplifted, whatever the admin stored for it.
        if currency == self.base_currency:
            return NEUTRAL_MULTIPLIER
        entry = self.entries.get(currency)
        if entry is None:
            return NEUTRAL_MULTIPLIER
        return entry.multiplier

    def rate_to_base_for(self, currency: str) -> Optional[float]:
        entry = self.entries.get(currency)
        return entry.rate_to_base if entry else None


@dataclass(frozen=True)
class ConversionContext:
    currency: str
    rates: RateTable
    multipliers: MultiplierTable
    base_currency: str = BASE_CURRENCY
