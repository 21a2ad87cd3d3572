"""Pydantic models and catalog constants for the storefront currency service."""

from .constants import (
    BASE_CURRENCY,
    CURRENCY_NAMES,
    CURRENCY_SYMBOLS,
    SUFFIX_SYMBOL_CURRENCIES,
)  # re-export
from .multiplier import MultiplierIn, MultiplierOut, MultiplierUpdate
from .rates import CurrencyInfo, RatesResponse

__all__ = [
    "BASE_CURRENCY",
    "CURRENCY_NAMES",
    "CURRENCY_SYMBOLS",
    "SUFFIX_SYMBOL_CURRENCIES",
    "MultiplierIn",
    "MultiplierOut",
    "MultiplierUpdate",
    "CurrencyInfo",
    "RatesResponse",
]
