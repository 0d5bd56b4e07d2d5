"""
Models package
"""
from candle_shop.models.user import User
from candle_shop.models.product import Product, Review
from candle_shop.models.order import Order, OrderItem

__all__ = ["User", "Product", "Review", "Order", "OrderItem"]
