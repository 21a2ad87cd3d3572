from __future__ import annotations

"""Rate table provider abstraction.

A provider returns the whole generic FX table in one call: units of each
currency per 1 unit of the base currency. The table is published as-is to
storefront clients, which do the display conversion themselves.
"""
from abc import ABC, abstractmethod
from typing import Dict


class RateTableProvider(ABC):
    base_currency: str = "INR"

    @abstractmethod
    async def fetch_table(self) -> Dict[str, float]:
        """Return {code: units of code per 1 base unit}."""
        raise NotImplementedError
