"""
Auth Service - accounts, password hashing and bearer tokens
"""
from datetime import datetime, timedelta, timezone
from typing import List

import bcrypt
import jwt
from sqlalchemy.orm import Session

from candle_shop.config import settings
from candle_shop.errors import BadRequestError, NotAuthorizedError, NotFoundError
from candle_shop.logging_config import get_logger
from candle_shop.models.user import User
from candle_shop.repositories.order_repository import OrderRepository
from candle_shop.repositories.user_repository import UserRepository
from candle_shop.schemas.user import AuthResponse, ProfileUpdate, UserLogin, UserRegister, UserResponse

logger = get_logger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def create_access_token(user_id: int) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(days=settings.JWT_EXPIRES_DAYS),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> int:
    """
    Return the user id carried by a bearer token
    
    Raises:
        NotAuthorizedError: if the token is invalid or expired
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        return int(payload["sub"])
    except (jwt.PyJWTError, KeyError, ValueError):
        raise NotAuthorizedError("Not authorized, token failed")


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        **UserResponse.model_validate(user).model_dump(),
        token=create_access_token(user.id),
    )


class AuthService:
    """Service layer for account management"""
    
    def __init__(self, db: Session):
        self.repository = UserRepository(db)
        self.order_repository = OrderRepository(db)
    
    def register(self, data: UserRegister) -> AuthResponse:
        if self.repository.get_by_email(data.email):
            raise BadRequestError("User already exists")
        user = self.repository.create(
            name=data.name,
            email=data.email,
            password_hash=hash_password(data.password),
        )
        logger.info("user_registered", user_id=user.id)
        return _auth_response(user)
    
    def login(self, data: UserLogin) -> AuthResponse:
        user = self.repository.get_by_email(data.email)
        if not user or not check_password(data.password, user.password_hash):
            raise NotAuthorizedError("Invalid email or password")
        return _auth_response(user)
    
    def get_user(self, user_id: int) -> User:
        user = self.repository.get_by_id(user_id)
        if not user:
            raise NotAuthorizedError("Not authorized, user not found")
        return user
    
    def update_profile(self, user: User, data: ProfileUpdate) -> AuthResponse:
        fields = data.model_dump(exclude_unset=True, exclude_none=True)
        if "email" in fields:
            fields["email"] = fields["email"].lower()
            existing = self.repository.get_by_email(fields["email"])
            if existing and existing.id != user.id:
                raise BadRequestError("Email already in use")
        if "password" in fields:
            fields["password_hash"] = hash_password(fields.pop("password"))
        user = self.repository.update(user, fields)
        return _auth_response(user)
    
    def list_users(self) -> List[UserResponse]:
        return [UserResponse.model_validate(u) for u in self.repository.get_all()]
    
    def delete_user(self, user_id: int, acting_user: User) -> None:
        user = self.repository.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if user.id == acting_user.id:
            raise BadRequestError("Admins cannot delete their own account")
        if self.order_repository.count_by_user(user.id):
            raise BadRequestError("Cannot delete a user with orders")
        self.repository.delete(user)
        logger.info("user_deleted", user_id=user_id, by=acting_user.id)
