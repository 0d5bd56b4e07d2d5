"""
Order Repository - Data Access Layer
"""
from typing import List, Optional
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import desc

from candle_shop.models.order import Order


class OrderRepository:
    """Repository for Order CRUD operations"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_all(self) -> List[Order]:
        """Get all orders, newest first, with their owners"""
        return self.db.query(Order).options(
            selectinload(Order.user), selectinload(Order.items)
        ).order_by(desc(Order.created_at), desc(Order.id)).all()
    
    def get_by_id(self, order_id: int, for_update: bool = False) -> Optional[Order]:
        query = self.db.query(Order).filter(Order.id == order_id)
        if for_update:
            query = query.with_for_update()
        return query.first()
    
    def get_by_user(self, user_id: int) -> List[Order]:
        return self.db.query(Order).options(selectinload(Order.items)).filter(
            Order.user_id == user_id
        ).order_by(desc(Order.created_at), desc(Order.id)).all()
    
    def count_by_user(self, user_id: int) -> int:
        return self.db.query(Order).filter(Order.user_id == user_id).count()
    
    def create(self, order: Order) -> Order:
        """Persist a new order together with its line items"""
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        return order
    
    def save(self, order: Order) -> Order:
        self.db.commit()
        self.db.refresh(order)
        return order
    
    def delete(self, order: Order) -> None:
        self.db.delete(order)
        self.db.commit()
