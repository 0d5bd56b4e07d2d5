"""
Schemas package
"""
from candle_shop.schemas.common import ApiResponse, PaginatedResponse, MessageResponse, ErrorResponse
from candle_shop.schemas.user import (
    UserRegister,
    UserLogin,
    ProfileUpdate,
    UserResponse,
    UserSummary,
    AuthResponse
)
from candle_shop.schemas.product import (
    Dimensions,
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductFilters,
    ReviewCreate,
    ReviewResponse
)
from candle_shop.schemas.order import (
    OrderItemIn,
    ShippingAddress,
    OrderCreate,
    PaymentConfirmation,
    DeliveryUpdate,
    OrderStatusUpdate,
    OrderResponse,
    OrderCreated,
    PaymentOrder,
    MockPaymentResult,
    RefundResult
)

__all__ = [
    "ApiResponse",
    "PaginatedResponse",
    "MessageResponse",
    "ErrorResponse",
    "UserRegister",
    "UserLogin",
    "ProfileUpdate",
    "UserResponse",
    "UserSummary",
    "AuthResponse",
    "Dimensions",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "ProductFilters",
    "ReviewCreate",
    "ReviewResponse",
    "OrderItemIn",
    "ShippingAddress",
    "OrderCreate",
    "PaymentConfirmation",
    "DeliveryUpdate",
    "OrderStatusUpdate",
    "OrderResponse",
    "OrderCreated",
    "PaymentOrder",
    "MockPaymentResult",
    "RefundResult"
]
