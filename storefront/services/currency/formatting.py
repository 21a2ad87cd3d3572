"""Price string rendering."""

from __future__ import annotations

import math

from storefront.models.constants import SUFFIX_SYMBOL_CURRENCIES
from .catalog import get_currency_symbol


def format_amount(amount: float) -> str:
    # en-US grouping, always two fractional digits
    if not math.isfinite(amount):
        amount = 0.0
    return f"{amount:,.2f}"


def format_price(amount: float, currency: str) -> str:
    code = (currency or "").strip().upper()
    symbol = get_currency_symbol(code)
    formatted = format_amount(amount)
    if code in SUFFIX_SYMBOL_CURRENCIES:
        return f"{formatted} {symbol}"
    return f"{symbol}{formatted}"
