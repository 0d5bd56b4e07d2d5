"""
Shared FastAPI dependencies
"""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from candle_shop.database import get_db
from candle_shop.errors import ForbiddenError, NotAuthorizedError
from candle_shop.models.user import User
from candle_shop.services.auth_service import AuthService, decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to a user"""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise NotAuthorizedError("Not authorized, no token")
    user_id = decode_access_token(credentials.credentials)
    return AuthService(db).get_user(user_id)


def require_admin(user: User = Depends(get_current_user)) -> User:
    """Allow only administrators"""
    if not user.is_admin:
        raise ForbiddenError("Not authorized as an admin")
    return user
