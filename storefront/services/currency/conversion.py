from __future__ import annotations

import logging
import math

from .catalog import lookup_key
from .snapshot import ConversionContext

"""Display conversion of base-currency amounts.

Tier order, first match wins:
    1. identity        from == to -> amount, before any lookup
    2. uplift          from == base -> amount * multiplier(to); base multiplier is 1
    3. direct rate     to != base and admin rateToInr set -> effective / rateToInr
    4. generic table   empty table -> effective unchanged; otherwise
                       base -> other:  effective * rate[to]
                       other -> base:  effective / rate[from]
                       other -> other: effective / rate[from] * rate[to]
                       any missing rate -> effective unchanged

Nothing here raises; every unresolvable case returns the effective amount.
With an empty table and no direct rate the result is the (uplifted) base
amount even though it is then labelled with the target symbol.
"""

logger = logging.getLogger(__name__)


def convert_amount(
    amount: float,
    from_currency: str,
    to_currency: str,
    context: ConversionContext,
) -> float:
    from_currency = lookup_key(from_currency) or context.base_currency
    to_currency = lookup_key(to_currency) or context.base_currency

    if from_currency == to_currency:
        return amount
    if not isinstance(amount, (int, float)) or not math.isfinite(amount):
        return amount

    base = context.base_currency
    effective = amount
    if from_currency == base:
        effective = amount * context.multipliers.multiplier_for(to_currency)

    if to_currency != base:
        direct = context.multipliers.rate_to_base_for(to_currency)
        if direct is not None:
            return effective / direct

    table = context.rates
    if table.is_empty:
        logger.debug(
            "rate table empty; returning unconverted amount",
            extra={"currency": to_currency},
        )
        return effective

    if from_currency == base:
        to_rate = table.rate_for(to_currency)
        if to_rate is None:
            logger.debug("no rate for target", extra={"currency": to_currency})
            return effective
        return effective * to_rate

    from_rate = table.rate_for(from_currency)
    if to_currency == base:
        if from_rate is None:
            logger.debug("no rate for source", extra={"currency": from_currency})
            return effective
        return effective / from_rate

    to_rate = table.rate_for(to_currency)
    if from_rate is None or to_rate is None:
        return effective
    return effective / from_rate * to_rate
