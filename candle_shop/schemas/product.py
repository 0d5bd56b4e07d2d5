"""
Pydantic schemas for request/response validation
"""
from pydantic import BaseModel, Field, ConfigDict, model_validator
from typing import List, Literal, Optional
from datetime import datetime

Category = Literal['Scented', 'Unscented', 'Decorative', 'Seasonal']


class Dimensions(BaseModel):
    """Candle dimensions"""
    height: float = Field(..., gt=0)
    diameter: float = Field(..., gt=0)


class ProductBase(BaseModel):
    """Base Product schema with common fields"""
    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    description: str = Field(..., min_length=1, description="Product description")
    price: float = Field(..., ge=0, description="Product price")
    images: List[str] = Field(..., min_length=1, description="Image URLs (at least one)")
    category: Category
    scent: Optional[str] = Field(None, max_length=100, description="Required for scented candles")
    stock: int = Field(0, ge=0, description="Stock quantity")
    featured: bool = False
    dimensions: Dimensions
    burn_time: float = Field(..., gt=0, description="Burn time in hours")


class ProductCreate(ProductBase):
    """Schema for creating a new product"""
    
    @model_validator(mode="after")
    def scent_required_for_scented(self):
        if self.category == 'Scented' and not self.scent:
            raise ValueError("Scent is required for scented candles")
        return self


class ProductUpdate(BaseModel):
    """Schema for updating a product (all fields optional)"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    images: Optional[List[str]] = Field(None, min_length=1)
    category: Optional[Category] = None
    scent: Optional[str] = Field(None, max_length=100)
    stock: Optional[int] = Field(None, ge=0)
    featured: Optional[bool] = None
    dimensions: Optional[Dimensions] = None
    burn_time: Optional[float] = Field(None, gt=0)


class ReviewCreate(BaseModel):
    """Schema for submitting a review"""
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=1)


class ReviewResponse(BaseModel):
    """Schema for review response"""
    id: int
    user_id: Optional[int]
    name: str
    rating: int
    comment: str
    created_at: datetime
    
    model_config = ConfigDict(from_attributes=True)


class ProductResponse(BaseModel):
    """Schema for product response"""
    id: int
    name: str
    description: str
    price: float
    images: List[str]
    category: str
    scent: Optional[str]
    stock: int
    rating: float
    num_reviews: int
    featured: bool
    dimensions: Dimensions
    burn_time: float
    reviews: List[ReviewResponse] = []
    created_at: datetime
    
    model_config = ConfigDict(from_attributes=True)


class ProductFilters(BaseModel):
    """Catalog query parameters"""
    keyword: Optional[str] = None
    category: Optional[str] = None
    scent: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    page: int = 1
