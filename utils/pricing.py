"""
Money arithmetic shared by the client cart and the order service.

Everything is exact Decimal math. Client and server call the same
compute_totals so an order's total is reproducible from its lines.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, NamedTuple, Protocol

DEFAULT_TAX_RATE = Decimal("0.07")

CENT = Decimal("0.01")
PRICE_QUANT = CENT
RATING_QUANT = Decimal("0.1")
TOTAL_QUANT = Decimal("0.0001")


class PricedLine(Protocol):
    price: Decimal
    quantity: int


class Totals(NamedTuple):
    subtotal: Decimal
    tax: Decimal
    total: Decimal


def to_decimal(value) -> Decimal:
    """Convert a price-like value to Decimal without binary-float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def quantize(value, exp: Decimal) -> Decimal:
    return to_decimal(value).quantize(exp, rounding=ROUND_HALF_UP)


def compute_totals(lines: Iterable[PricedLine], tax_rate: Decimal = DEFAULT_TAX_RATE) -> Totals:
    """
    subtotal = sum(price * quantity), tax = subtotal * tax_rate,
    total = subtotal + tax. No rounding is applied.
    """
    subtotal = sum((to_decimal(line.price) * line.quantity for line in lines), Decimal("0"))
    tax = subtotal * to_decimal(tax_rate)
    return Totals(subtotal=subtotal, tax=tax, total=subtotal + tax)


def same_amount(a, b, tolerance: Decimal = CENT) -> bool:
    """True when two amounts agree to within tolerance (one cent by default)."""
    return abs(to_decimal(a) - to_decimal(b)) <= tolerance


def check_tax_rate(rate) -> Decimal:
    """
    Validate a tax rate and return it as a Decimal.

    Rates are limited to two decimal places (whole percent steps). Prices
    carry two places, so subtotal * rate then fits the four places an
    order total is stored with, and no total is ever rounded.
    """
    rate = to_decimal(rate)
    if rate < 0 or rate != rate.quantize(CENT):
        raise ValueError(f"Tax rate {rate} must be non-negative with at most 2 decimal places")
    return rate
