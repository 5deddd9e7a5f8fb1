"""Checkout price quote shown on the cart page.

Orders below the free-shipping threshold pay a flat fee; tax is a flat rate on
the subtotal. The quote is advisory: orders persist the figures the buyer
confirmed, with tax recorded as zero.
"""

from dataclasses import dataclass

FREE_SHIPPING_THRESHOLD = 500.0
FLAT_SHIPPING_FEE = 50.0
TAX_RATE = 0.08


@dataclass(frozen=True)
class PriceQuote:
    subtotal: float
    shipping: float
    tax: float
    total: float


def quote(subtotal: float) -> PriceQuote:
    shipping = 0.0 if subtotal >= FREE_SHIPPING_THRESHOLD else FLAT_SHIPPING_FEE
    tax = round(subtotal * TAX_RATE, 2)
    return PriceQuote(
        subtotal=subtotal,
        shipping=shipping,
        tax=tax,
        total=round(subtotal + shipping + tax, 2),
    )
