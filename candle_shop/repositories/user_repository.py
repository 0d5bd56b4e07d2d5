"""
User Repository - Data Access Layer
"""
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from candle_shop.errors import BadRequestError
from candle_shop.models.user import User


class UserRepository:
    """Repository for User CRUD operations"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_all(self) -> List[User]:
        return self.db.query(User).order_by(User.id).all()
    
    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()
    
    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(func.lower(User.email) == email.lower()).first()
    
    def create(self, name: str, email: str, password_hash: str, role: str = "user") -> User:
        user = User(name=name, email=email.lower(), password_hash=password_hash, role=role)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise BadRequestError("User already exists")
        self.db.refresh(user)
        return user
    
    def update(self, user: User, fields: dict) -> User:
        for field, value in fields.items():
            setattr(user, field, value)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise BadRequestError("Email already in use")
        self.db.refresh(user)
        return user
    
    def delete(self, user: User) -> None:
        self.db.delete(user)
        self.db.commit()
