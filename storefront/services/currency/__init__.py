"""Display-currency conversion core.

Typical wiring::

    store = build_preference_store()
    async with store:
        store.set_currency("USD")
        label = store.format(1499)
"""

from .api_client import CurrencyApiClient
from .catalog import (
    get_currency_name,
    get_currency_symbol,
    list_currencies,
    normalize_currency_code,
)
from .conversion import convert_amount
from .formatting import format_price
from .preference_store import PreferenceStore, build_preference_store
from .preferences import InMemoryPreferenceStorage, SqlitePreferenceStorage
from .snapshot import ConversionContext, MultiplierEntry, MultiplierTable, RateTable
from .stores import MultiplierStore, RateStore

__all__ = [
    "CurrencyApiClient",
    "ConversionContext",
    "InMemoryPreferenceStorage",
    "MultiplierEntry",
    "MultiplierStore",
    "MultiplierTable",
    "PreferenceStore",
    "RateStore",
    "RateTable",
    "SqlitePreferenceStorage",
    "build_preference_store",
    "convert_amount",
    "format_price",
    "get_currency_name",
    "get_currency_symbol",
    "list_currencies",
    "normalize_currency_code",
]
