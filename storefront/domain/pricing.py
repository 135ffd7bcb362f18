# storefront/domain/pricing.py
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Tuple

from storefront.utils.settings import TAX_RATE, FREE_SHIPPING_THRESHOLD, SHIPPING_FEE

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


@dataclass(frozen=True)
class PricedCart:
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal


def _money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def price_lines(lines: Iterable[Tuple[Decimal, int]]) -> PricedCart:
    """
    Price a sequence of (unit_price, quantity) pairs.

    subtotal = sum(unit_price * quantity)
    tax      = 10% of subtotal, rounded half-up to cents
    shipping = 0 above the free shipping threshold (strictly greater), flat fee otherwise
    total    = subtotal + tax + shipping
    """
    subtotal = ZERO
    for unit_price, quantity in lines:
        price = Decimal(str(unit_price))
        if price < 0:
            raise ValueError("Unit price must not be negative")
        if quantity < 0:
            raise ValueError("Quantity must not be negative")
        subtotal += price * quantity

    subtotal = _money(subtotal)
    tax = _money(subtotal * TAX_RATE)
    shipping = ZERO if subtotal > FREE_SHIPPING_THRESHOLD else _money(SHIPPING_FEE)

    return PricedCart(
        subtotal=subtotal,
        tax=tax,
        shipping=shipping,
        total=subtotal + tax + shipping,
    )


def to_minor_units(amount: Decimal) -> int:
    return int(_money(amount) * 100)
