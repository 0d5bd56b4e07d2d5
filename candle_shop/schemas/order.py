"""
Pydantic schemas for request/response validation
"""
from pydantic import BaseModel, Field, EmailStr, ConfigDict
from typing import List, Literal, Optional
from datetime import datetime

from candle_shop.schemas.user import UserSummary

OrderStatus = Literal['pending', 'processing', 'shipped', 'delivered', 'cancelled']
PaymentMethod = Literal['razorpay', 'mock']


class OrderItemIn(BaseModel):
    """Line item as submitted by the cart"""
    product_id: int = Field(..., gt=0, description="Product ID")
    name: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., ge=0)
    quantity: int = Field(..., gt=0)
    image: str = Field(..., min_length=1, max_length=500)


class ShippingAddress(BaseModel):
    """Shipping address snapshot"""
    address: str = Field(..., min_length=1, max_length=500)
    city: str = Field(..., min_length=1, max_length=255)
    postal_code: str = Field(..., min_length=1, max_length=50)
    country: str = Field(..., min_length=1, max_length=100)


class OrderCreate(BaseModel):
    """Schema for creating a new order"""
    order_items: List[OrderItemIn] = Field(default_factory=list)
    shipping_address: ShippingAddress
    payment_method: PaymentMethod = 'razorpay'


class PaymentConfirmation(BaseModel):
    """Payment result returned to the client by the gateway checkout"""
    razorpay_payment_id: str = Field(..., min_length=1)
    razorpay_order_id: str = Field(..., min_length=1)
    razorpay_signature: str = Field(..., min_length=1)
    email_address: Optional[EmailStr] = None


class DeliveryUpdate(BaseModel):
    """Schema for marking an order delivered"""
    tracking_number: str = Field(..., min_length=1, max_length=100)


class OrderStatusUpdate(BaseModel):
    """Schema for updating order status"""
    status: OrderStatus = Field(..., description="Order status")


class OrderItemResponse(BaseModel):
    """Schema for line item response"""
    product_id: int
    name: str
    price: float
    quantity: int
    image: str
    
    model_config = ConfigDict(from_attributes=True)


class PaymentResult(BaseModel):
    """Gateway payment tuple stored once the order is paid"""
    razorpay_payment_id: Optional[str] = None
    razorpay_order_id: Optional[str] = None
    razorpay_signature: Optional[str] = None
    status: Optional[str] = None
    email_address: Optional[str] = None


class OrderResponse(BaseModel):
    """Schema for order response"""
    id: int
    user_id: int
    user: Optional[UserSummary] = None
    order_items: List[OrderItemResponse]
    shipping_address: ShippingAddress
    payment_method: str
    payment_order_id: Optional[str]
    payment_result: Optional[PaymentResult]
    items_price: float
    tax_price: float
    shipping_price: float
    total_price: float
    is_paid: bool
    paid_at: Optional[datetime]
    is_delivered: bool
    delivered_at: Optional[datetime]
    status: str
    tracking_number: Optional[str]
    created_at: datetime
    updated_at: datetime
    
    @classmethod
    def from_order(cls, order, include_user: bool = False) -> "OrderResponse":
        """Build the response from an Order row"""
        payment_result = None
        if order.payment_status:
            payment_result = PaymentResult(
                razorpay_payment_id=order.razorpay_payment_id,
                razorpay_order_id=order.razorpay_order_id,
                razorpay_signature=order.razorpay_signature,
                status=order.payment_status,
                email_address=order.payer_email,
            )
        return cls(
            id=order.id,
            user_id=order.user_id,
            user=UserSummary.model_validate(order.user) if include_user and order.user else None,
            order_items=[OrderItemResponse.model_validate(i) for i in order.items],
            shipping_address=ShippingAddress(
                address=order.shipping_address,
                city=order.shipping_city,
                postal_code=order.shipping_postal_code,
                country=order.shipping_country,
            ),
            payment_method=order.payment_method,
            payment_order_id=order.payment_order_id,
            payment_result=payment_result,
            items_price=order.items_price,
            tax_price=order.tax_price,
            shipping_price=order.shipping_price,
            total_price=order.total_price,
            is_paid=order.is_paid,
            paid_at=order.paid_at,
            is_delivered=order.is_delivered,
            delivered_at=order.delivered_at,
            status=order.status,
            tracking_number=order.tracking_number,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class PaymentOrder(BaseModel):
    """Payment-provider order the client completes checkout against"""
    id: str
    amount: int
    currency: str
    mock: bool = False
    receipt: Optional[str] = None


class OrderCreated(BaseModel):
    """Payload of a successful checkout"""
    order: OrderResponse
    payment_order: PaymentOrder


class MockPaymentResult(BaseModel):
    """Result of a simulated payment"""
    razorpay_payment_id: str
    razorpay_order_id: str
    razorpay_signature: str
    mock: bool = True


class RefundResult(BaseModel):
    """Result of a refund request"""
    id: str
    payment_id: str
    status: str
    mock: bool = False
