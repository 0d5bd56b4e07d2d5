"""
Pydantic schemas for accounts and authentication
"""
from pydantic import BaseModel, Field, EmailStr, ConfigDict
from typing import Literal, Optional
from datetime import datetime


class UserRegister(BaseModel):
    """Schema for registering a new account"""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class UserLogin(BaseModel):
    """Schema for logging in"""
    email: EmailStr
    password: str = Field(..., min_length=1)


class ProfileUpdate(BaseModel):
    """Schema for updating the caller's profile (all fields optional)"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6, max_length=128)


class UserResponse(BaseModel):
    """Public view of a user"""
    id: int
    name: str
    email: str
    role: Literal['user', 'admin']
    created_at: datetime
    updated_at: datetime
    
    model_config = ConfigDict(from_attributes=True)


class UserSummary(BaseModel):
    """Owner summary embedded in admin order listings"""
    id: int
    name: str
    email: str
    
    model_config = ConfigDict(from_attributes=True)


class AuthResponse(UserResponse):
    """User plus a freshly issued bearer token"""
    token: str
