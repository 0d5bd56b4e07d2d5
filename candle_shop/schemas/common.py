"""
Response envelopes shared by all endpoints
"""
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope: {success, data}"""
    success: bool = True
    data: T


class PaginatedResponse(ApiResponse[T], Generic[T]):
    """Success envelope with pagination metadata"""
    page: int
    pages: int
    total: int


class MessageResponse(BaseModel):
    """Success envelope carrying only a message"""
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Error envelope"""
    success: bool = False
    message: str
    detail: Optional[list] = None
