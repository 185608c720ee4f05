from decimal import Decimal

import pytest

from storefront.domain.pricing import calculate_totals, to_money


def test_scenario_two_products_under_threshold():
    totals = calculate_totals([(Decimal("100"), 2), (Decimal("20"), 1)])

    assert totals.subtotal == Decimal("220.00")
    assert totals.tax == Decimal("22.00")
    assert totals.shipping_charges == Decimal("50.00")
    assert totals.total == Decimal("292.00")


@pytest.mark.parametrize(
    "lines",
    [
        [],
        [(Decimal("0"), 5)],
        [(Decimal("0.01"), 1)],
        [(Decimal("19.99"), 3), (Decimal("5.55"), 7)],
        [(Decimal("999.99"), 1)],
        [(Decimal("1000"), 1)],
        [(Decimal("1000.01"), 1)],
        [(Decimal("333.33"), 3), (Decimal("0.05"), 1)],
        [(Decimal("12345.67"), 4)],
    ],
)
def test_total_is_sum_of_parts(lines):
    totals = calculate_totals(lines)

    assert totals.total == totals.subtotal + totals.tax + totals.shipping_charges
    assert totals.tax == to_money(totals.subtotal * Decimal("0.10"))


@pytest.mark.parametrize(
    "subtotal, shipping",
    [
        (Decimal("0"), Decimal("50")),
        (Decimal("999.99"), Decimal("50")),
        (Decimal("1000"), Decimal("50")),
        (Decimal("1000.01"), Decimal("0")),
        (Decimal("25000"), Decimal("0")),
    ],
)
def test_shipping_threshold_is_strictly_greater(subtotal, shipping):
    assert calculate_totals([(subtotal, 1)]).shipping_charges == shipping


def test_tax_rounds_half_up_to_cents():
    # 0.05 * 0.10 = 0.005 -> 0.01
    assert calculate_totals([(Decimal("0.05"), 1)]).tax == Decimal("0.01")


def test_rates_can_be_overridden():
    totals = calculate_totals(
        [(Decimal("100"), 1)],
        tax_rate=Decimal("0.23"),
        free_shipping_threshold=Decimal("50"),
        flat_shipping_fee=Decimal("15"),
    )

    assert totals.tax == Decimal("23.00")
    assert totals.shipping_charges == Decimal("0")
    assert totals.total == Decimal("123.00")


def test_negative_input_is_rejected():
    with pytest.raises(ValueError):
        calculate_totals([(Decimal("-1"), 1)])

    with pytest.raises(ValueError):
        calculate_totals([(Decimal("1"), -1)])
