"""
Auth API endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from candle_shop.api.deps import get_current_user, require_admin
from candle_shop.database import get_db
from candle_shop.models.user import User
from candle_shop.schemas.common import ApiResponse, MessageResponse
from candle_shop.schemas.user import AuthResponse, ProfileUpdate, UserLogin, UserRegister, UserResponse
from candle_shop.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    """Dependency to get AuthService instance"""
    return AuthService(db)


@router.post("/register", response_model=ApiResponse[AuthResponse], status_code=status.HTTP_201_CREATED, summary="Register")
def register(
    data: UserRegister,
    service: AuthService = Depends(get_auth_service)
):
    """Create an account and return it with a bearer token"""
    return ApiResponse(data=service.register(data))


@router.post("/login", response_model=ApiResponse[AuthResponse], summary="Log in")
def login(
    data: UserLogin,
    service: AuthService = Depends(get_auth_service)
):
    return ApiResponse(data=service.login(data))


@router.get("/me", response_model=ApiResponse[UserResponse], summary="Current user")
def get_me(user: User = Depends(get_current_user)):
    return ApiResponse(data=UserResponse.model_validate(user))


@router.put("/profile", response_model=ApiResponse[AuthResponse], summary="Update profile")
def update_profile(
    data: ProfileUpdate,
    user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service)
):
    """
    Update the caller's name, email or password
    
    Returns a fresh token.
    """
    return ApiResponse(data=service.update_profile(user, data))


@router.get("/users", response_model=ApiResponse[List[UserResponse]], summary="List users")
def get_users(
    admin: User = Depends(require_admin),
    service: AuthService = Depends(get_auth_service)
):
    return ApiResponse(data=service.list_users())


@router.delete("/users/{user_id}", response_model=MessageResponse, summary="Delete user")
def delete_user(
    user_id: int,
    admin: User = Depends(require_admin),
    service: AuthService = Depends(get_auth_service)
):
    service.delete_user(user_id, admin)
    return MessageResponse(message="User removed")
