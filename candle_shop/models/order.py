"""
SQLAlchemy Order and OrderItem models
"""
from sqlalchemy import (
    Column, Integer, String, Float, Boolean, DateTime, ForeignKey,
    CheckConstraint, event,
)
from sqlalchemy.orm import relationship

from candle_shop.database import Base
from candle_shop.models.base import utcnow

ORDER_STATUSES = ("pending", "processing", "shipped", "delivered", "cancelled")
PAYMENT_METHODS = ("razorpay", "mock")


class Order(Base):
    """Checkout record with its payment and fulfilment state"""
    
    __tablename__ = "orders"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    
    # Shipping address snapshot
    shipping_address = Column(String(500), nullable=False)
    shipping_city = Column(String(255), nullable=False)
    shipping_postal_code = Column(String(50), nullable=False)
    shipping_country = Column(String(100), nullable=False)
    
    # Payment
    payment_method = Column(String(20), nullable=False, default="razorpay")
    payment_order_id = Column(String(100), nullable=True, index=True)
    razorpay_payment_id = Column(String(100), nullable=True)
    razorpay_order_id = Column(String(100), nullable=True)
    razorpay_signature = Column(String(255), nullable=True)
    payment_status = Column(String(50), nullable=True)
    payer_email = Column(String(255), nullable=True)
    
    # Prices
    items_price = Column(Float, nullable=False, default=0.0)
    tax_price = Column(Float, nullable=False, default=0.0)
    shipping_price = Column(Float, nullable=False, default=0.0)
    total_price = Column(Float, nullable=False, default=0.0)
    
    # Fulfilment
    is_paid = Column(Boolean, nullable=False, default=False)
    paid_at = Column(DateTime(timezone=True), nullable=True)
    is_delivered = Column(Boolean, nullable=False, default=False)
    delivered_at = Column(DateTime(timezone=True), nullable=True)
    status = Column(String(50), nullable=False, default='pending', index=True)
    tracking_number = Column(String(100), nullable=True)
    
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    
    user = relationship("User", back_populates="orders")
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )
    
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'processing', 'shipped', 'delivered', 'cancelled')",
            name='check_order_status_valid',
        ),
        CheckConstraint("payment_method IN ('razorpay', 'mock')", name='check_payment_method_valid'),
    )
    
    def recalculate_total(self) -> None:
        """total = sum(price * quantity) + shipping + tax"""
        subtotal = sum(item.price * item.quantity for item in self.items)
        self.total_price = round(subtotal + (self.shipping_price or 0.0) + (self.tax_price or 0.0), 2)
    
    def __repr__(self):
        return f"<Order(id={self.id}, user_id={self.user_id}, total={self.total_price}, status='{self.status}')>"


class OrderItem(Base):
    """Line item snapshot, copied from the cart at checkout"""
    
    __tablename__ = "order_items"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, nullable=False, index=True)  # not a FK: history survives product deletion
    name = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)
    quantity = Column(Integer, nullable=False)
    image = Column(String(500), nullable=False)
    
    order = relationship("Order", back_populates="items")
    
    __table_args__ = (
        CheckConstraint('quantity > 0', name='check_item_quantity_positive'),
        CheckConstraint('price >= 0', name='check_item_price_non_negative'),
    )
    
    def __repr__(self):
        return f"<OrderItem(order_id={self.order_id}, product_id={self.product_id}, quantity={self.quantity})>"


@event.listens_for(Order, "before_insert")
@event.listens_for(Order, "before_update")
def _recalculate_order_total(mapper, connection, target):
    target.recalculate_total()
