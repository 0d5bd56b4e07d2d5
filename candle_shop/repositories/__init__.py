"""
Repositories package
"""
from candle_shop.repositories.user_repository import UserRepository
from candle_shop.repositories.product_repository import ProductRepository
from candle_shop.repositories.order_repository import OrderRepository

__all__ = ["UserRepository", "ProductRepository", "OrderRepository"]
