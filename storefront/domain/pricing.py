# storefront/domain/pricing.py
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Tuple

from storefront.utils.settings import TAX_RATE, FREE_SHIPPING_THRESHOLD, FLAT_SHIPPING_FEE

CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: Decimal
    tax: Decimal
    shipping_charges: Decimal
    total: Decimal


def calculate_totals(
    lines: Iterable[Tuple[Decimal, int]],
    tax_rate: Decimal = TAX_RATE,
    free_shipping_threshold: Decimal = FREE_SHIPPING_THRESHOLD,
    flat_shipping_fee: Decimal = FLAT_SHIPPING_FEE,
) -> PriceBreakdown:
    """
    (cena jednostkowa, ilosc) -> subtotal, podatek, dostawa, suma.

    Czysta funkcja, bez I/O. Podatek zaokraglany do groszy (half up),
    dostawa darmowa tylko gdy subtotal > prog.
    """
    subtotal = Decimal("0.00")
    for unit_price, quantity in lines:
        price = Decimal(str(unit_price))
        if price < 0 or quantity < 0:
            raise ValueError(f"Price and quantity must be non-negative, got {price} x {quantity}")
        subtotal += price * quantity

    subtotal = to_money(subtotal)
    tax = to_money(subtotal * Decimal(str(tax_rate)))
    shipping = Decimal("0.00") if subtotal > free_shipping_threshold else to_money(flat_shipping_fee)

    return PriceBreakdown(
        subtotal=subtotal,
        tax=tax,
        shipping_charges=shipping,
        total=subtotal + tax + shipping,
    )
