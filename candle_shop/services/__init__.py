"""
Services package
"""
from candle_shop.services.auth_service import AuthService
from candle_shop.services.notification_service import NotificationService
from candle_shop.services.order_service import OrderService
from candle_shop.services.product_service import ProductService

__all__ = ["AuthService", "NotificationService", "OrderService", "ProductService"]
