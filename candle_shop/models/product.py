"""
SQLAlchemy Product and Review models
"""
from sqlalchemy import (
    Column, Integer, String, Float, Boolean, DateTime, Text, JSON,
    ForeignKey, CheckConstraint, UniqueConstraint,
)
from sqlalchemy.orm import relationship

from candle_shop.database import Base
from candle_shop.models.base import utcnow

CATEGORIES = ("Scented", "Unscented", "Decorative", "Seasonal")


class Product(Base):
    """Candle product with embedded reviews"""
    
    __tablename__ = "products"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    images = Column(JSON, nullable=False, default=list)
    category = Column(String(50), nullable=False, index=True)
    scent = Column(String(100), nullable=True, index=True)
    stock = Column(Integer, nullable=False, default=0)
    rating = Column(Float, nullable=False, default=0.0)
    num_reviews = Column(Integer, nullable=False, default=0)
    featured = Column(Boolean, nullable=False, default=False, index=True)
    height = Column(Float, nullable=False)
    diameter = Column(Float, nullable=False)
    burn_time = Column(Float, nullable=False)  # hours
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    
    reviews = relationship(
        "Review",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="Review.created_at",
    )
    
    __table_args__ = (
        CheckConstraint('price >= 0', name='check_price_non_negative'),
        CheckConstraint('stock >= 0', name='check_stock_non_negative'),
    )
    
    @property
    def dimensions(self) -> dict:
        return {"height": self.height, "diameter": self.diameter}
    
    def refresh_rating(self) -> None:
        """Recompute rating and review count from the review list"""
        self.num_reviews = len(self.reviews)
        if self.reviews:
            self.rating = sum(r.rating for r in self.reviews) / self.num_reviews
        else:
            self.rating = 0.0
    
    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', price={self.price}, stock={self.stock})>"


class Review(Base):
    """One customer's review of a product"""
    
    __tablename__ = "reviews"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    
    product = relationship("Product", back_populates="reviews")
    
    __table_args__ = (
        CheckConstraint('rating >= 1 AND rating <= 5', name='check_rating_range'),
        UniqueConstraint('product_id', 'user_id', name='uq_review_product_user'),
    )
    
    def __repr__(self):
        return f"<Review(id={self.id}, product_id={self.product_id}, rating={self.rating})>"
