"""
Checkout price calculation
"""
from dataclasses import dataclass
from typing import Iterable

from candle_shop.config import settings


@dataclass(frozen=True)
class OrderPrices:
    items_price: float
    shipping_price: float
    tax_price: float
    total_price: float
    
    @property
    def amount_minor(self) -> int:
        """Total in the smallest currency unit (paise/cents)"""
        return int(round(self.total_price * 100))


def calculate_prices(
    items: Iterable,
    free_shipping_threshold: float = None,
    shipping_fee: float = None,
    tax_rate: float = None,
) -> OrderPrices:
    """
    Price a cart
    
    Shipping is free strictly above the threshold, otherwise a flat fee.
    Tax is a fixed rate of the subtotal, rounded to cents.
    
    Args:
        items: objects with ``price`` and ``quantity``
    """
    if free_shipping_threshold is None:
        free_shipping_threshold = settings.FREE_SHIPPING_THRESHOLD
    if shipping_fee is None:
        shipping_fee = settings.SHIPPING_FEE
    if tax_rate is None:
        tax_rate = settings.TAX_RATE
    
    items_price = round(sum(item.price * item.quantity for item in items), 2)
    shipping_price = 0.0 if items_price > free_shipping_threshold else float(shipping_fee)
    tax_price = round(tax_rate * items_price, 2)
    total_price = round(items_price + shipping_price + tax_price, 2)
    
    return OrderPrices(
        items_price=items_price,
        shipping_price=shipping_price,
        tax_price=tax_price,
        total_price=total_price,
    )
