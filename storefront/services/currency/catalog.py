"""Symbol / name lookups and currency code normalization."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional

from storefront.models.constants import (
    BASE_CURRENCY,
    CURRENCY_NAMES,
    CURRENCY_SYMBOLS,
    DEFAULT_SELECTOR_CURRENCIES,
)

_CODE_RE = re.compile(r"^[A-Z]{3}$")


def normalize_currency_code(value: Any) -> Optional[str]:
    """Return the uppercase 3-letter code, or None when `value` is not one."""
    if not isinstance(value, str):
        return None
    code = value.strip().upper()
    if not _CODE_RE.match(code):
        return None
    return code


def lookup_key(currency: str) -> str:
    return (currency or "").strip().upper()


def get_currency_symbol(currency: str) -> str:
    key = lookup_key(currency)
    return CURRENCY_SYMBOLS.get(key, key)


def get_currency_name(currency: str) -> str:
    key = lookup_key(currency)
    return CURRENCY_NAMES.get(key, key)


def list_currencies(
    rates: Mapping[str, float], base_currency: str = BASE_CURRENCY
) -> List[Dict[str, Any]]:
    """Selector listing built from a rate table.

    The base currency always comes first with rate 1; remaining codes are sorted.
    An empty table yields the short default list so the selector is never blank.
    """
    if not rates:
        pairs = list(DEFAULT_SELECTOR_CURRENCIES)
    else:
        others = sorted(code for code in rates if code != base_currency)
        pairs = [(base_currency, 1.0)] + [(code, float(rates[code])) for code in others]
    return [
        {
            "code": code,
            "name": get_currency_name(code),
            "symbol": get_currency_symbol(code),
            "rate": rate,
        }
        for code, rate in pairs
    ]
