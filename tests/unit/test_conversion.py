import math

import pytest

from storefront.services.currency.conversion import convert_amount
from storefront.services.currency.snapshot import (
    ConversionContext,
    MultiplierEntry,
    MultiplierTable,
    RateTable,
)


def make_context(currency="INR", rates=None, multipliers=None) -> ConversionContext:
    entries = {
        code: MultiplierEntry(currency_code=code, multiplier=m, rate_to_base=r)
        for code, (m, r) in (multipliers or {}).items()
    }
    return ConversionContext(
        currency=currency,
        rates=RateTable(rates=rates or {}),
        multipliers=MultiplierTable(entries=entries),
    )


TABLE = {"INR": 1.0, "USD": 0.012, "EUR": 0.011, "GBP": 0.0095}


@pytest.mark.parametrize("code", ["INR", "USD", "EUR", "GBP", "XYZ"])
@pytest.mark.parametrize("amount", [0, 1, 300, 1234.5, -42.25])
def test_same_currency_is_identity(code, amount) -> None:
    ctx = make_context(
        code, rates=TABLE, multipliers={"USD": (4.0, 85.0), "INR": (5.0, 2.0)}
    )
    assert convert_amount(amount, code, code, ctx) == amount


def test_base_to_base_ignores_configured_multiplier_and_rate() -> None:
    ctx = make_context("INR", rates=TABLE, multipliers={"INR": (3.0, 0.5)})
    assert convert_amount(999.99, "INR", "INR", ctx) == 999.99


def test_direct_admin_rate_applies_multiplier_then_divides() -> None:
    ctx = make_context("USD", rates=TABLE, multipliers={"USD": (4.0, 85.0)})
    result = convert_amount(300, "INR", "USD", ctx)
    assert result == pytest.approx(300 * 4 / 85)
    assert result == pytest.approx(14.1176, abs=1e-4)


def test_direct_admin_rate_wins_over_generic_table() -> None:
    ctx = make_context("USD", rates=TABLE, multipliers={"USD": (1.0, 80.0)})
    assert convert_amount(800, "INR", "USD", ctx) == pytest.approx(10.0)


def test_generic_table_used_when_no_direct_rate() -> None:
    ctx = make_context("EUR", rates=TABLE)
    assert convert_amount(1000, "INR", "EUR", ctx) == pytest.approx(11.0)


def test_codes_are_trimmed_and_uppercased_before_lookup() -> None:
    ctx = make_context("USD", rates=TABLE, multipliers={"USD": (4.0, 85.0)})
    assert convert_amount(300, " inr", " usd ", ctx) == pytest.approx(300 * 4 / 85)
    assert convert_amount(300, " usd", "USD", ctx) == 300


def test_multiplier_without_direct_rate_falls_back_to_table() -> None:
    ctx = make_context("EUR", rates=TABLE, multipliers={"EUR": (1.1, None)})
    assert convert_amount(1000, "INR", "EUR", ctx) == pytest.approx(1000 * 1.1 * 0.011)


def test_empty_table_without_direct_rate_returns_uplifted_base_amount() -> None:
    ctx = make_context("USD", rates={}, multipliers={"USD": (4.0, None)})
    assert convert_amount(300, "INR", "USD", ctx) == 1200


def test_empty_table_still_honours_direct_rate() -> None:
    ctx = make_context("USD", rates={}, multipliers={"USD": (2.0, 80.0)})
    assert convert_amount(400, "INR", "USD", ctx) == pytest.approx(10.0)


def test_missing_target_rate_returns_effective_amount() -> None:
    ctx = make_context("JPY", rates=TABLE, multipliers={"JPY": (2.0, None)})
    assert convert_amount(100, "INR", "JPY", ctx) == 200


def test_to_base_divides_by_source_rate_without_multiplier() -> None:
    ctx = make_context("INR", rates=TABLE, multipliers={"USD": (4.0, None)})
    assert convert_amount(12, "USD", "INR", ctx) == pytest.approx(1000.0)


def test_to_base_with_missing_source_rate_is_unchanged() -> None:
    ctx = make_context("INR", rates=TABLE)
    assert convert_amount(12, "JPY", "INR", ctx) == 12


def test_two_non_base_currencies_bridge_through_base() -> None:
    ctx = make_context("EUR", rates=TABLE)
    assert convert_amount(12, "USD", "EUR", ctx) == pytest.approx(12 / 0.012 * 0.011)


def test_two_non_base_with_one_missing_rate_is_unchanged() -> None:
    ctx = make_context("JPY", rates=TABLE)
    assert convert_amount(12, "USD", "JPY", ctx) == 12


def test_direct_rate_for_target_applies_even_from_non_base_source() -> None:
    ctx = make_context("EUR", rates=TABLE, multipliers={"EUR": (3.0, 90.0)})
    # no uplift (source is not base), admin rate still divides
    assert convert_amount(180, "USD", "EUR", ctx) == pytest.approx(2.0)


def test_codes_are_case_insensitive() -> None:
    ctx = make_context("EUR", rates=TABLE)
    assert convert_amount(1000, "inr", "eur", ctx) == pytest.approx(11.0)


def test_non_finite_amount_is_returned_unchanged() -> None:
    ctx = make_context("USD", rates=TABLE)
    assert math.isnan(convert_amount(float("nan"), "INR", "USD", ctx))
    assert convert_amount(float("inf"), "INR", "USD", ctx) == float("inf")
