"""
SQLAlchemy User model
"""
from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint
from sqlalchemy.orm import relationship

from candle_shop.database import Base
from candle_shop.models.base import utcnow


class User(Base):
    """Customer or administrator account"""
    
    __tablename__ = "users"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="user")
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    
    orders = relationship("Order", back_populates="user")
    
    __table_args__ = (
        CheckConstraint("role IN ('user', 'admin')", name="check_role_valid"),
    )
    
    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
    
    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
