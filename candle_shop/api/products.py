"""
Product API endpoints
"""
from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from candle_shop.api.deps import get_current_user, require_admin
from candle_shop.database import get_db
from candle_shop.models.user import User
from candle_shop.services.product_service import ProductService
from candle_shop.schemas.common import ApiResponse, MessageResponse, PaginatedResponse
from candle_shop.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductFilters,
    ReviewCreate
)

router = APIRouter(prefix="/products", tags=["products"])


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    """Dependency to get ProductService instance"""
    return ProductService(db)


@router.get("", response_model=PaginatedResponse[List[ProductResponse]], summary="Get products")
def get_products(
    keyword: Optional[str] = Query(None, description="Case-insensitive name search"),
    category: Optional[str] = Query(None),
    scent: Optional[str] = Query(None),
    min_price: Optional[float] = Query(None, ge=0, alias="minPrice"),
    max_price: Optional[float] = Query(None, ge=0, alias="maxPrice"),
    page: int = Query(1, ge=1, description="1-based page number"),
    service: ProductService = Depends(get_product_service)
):
    """
    Retrieve the catalog, newest first, 12 products per page
    
    - **keyword**: substring of the product name
    - **category**, **scent**: exact match
    - **minPrice**, **maxPrice**: inclusive price bounds
    """
    filters = ProductFilters(
        keyword=keyword,
        category=category,
        scent=scent,
        min_price=min_price,
        max_price=max_price,
        page=page,
    )
    return service.search_products(filters)


@router.get("/featured", response_model=ApiResponse[List[ProductResponse]], summary="Get featured products")
def get_featured_products(service: ProductService = Depends(get_product_service)):
    return ApiResponse(data=service.get_featured_products())


@router.get("/{product_id}", response_model=ApiResponse[ProductResponse], summary="Get product by ID")
def get_product(
    product_id: int,
    service: ProductService = Depends(get_product_service)
):
    return ApiResponse(data=service.get_product(product_id))


@router.post("", response_model=ApiResponse[ProductResponse], status_code=status.HTTP_201_CREATED, summary="Create product")
def create_product(
    product_data: ProductCreate,
    admin: User = Depends(require_admin),
    service: ProductService = Depends(get_product_service)
):
    """
    Create a new product (admin)
    
    - **scent**: required when **category** is Scented
    """
    return ApiResponse(data=service.create_product(product_data))


@router.put("/{product_id}", response_model=ApiResponse[ProductResponse], summary="Update product")
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    admin: User = Depends(require_admin),
    service: ProductService = Depends(get_product_service)
):
    """
    Update an existing product (admin)
    
    All fields are optional. Only provided fields will be updated.
    """
    return ApiResponse(data=service.update_product(product_id, product_data))


@router.delete("/{product_id}", response_model=MessageResponse, summary="Delete product")
def delete_product(
    product_id: int,
    admin: User = Depends(require_admin),
    service: ProductService = Depends(get_product_service)
):
    service.delete_product(product_id)
    return MessageResponse(message="Product removed successfully")


@router.post("/{product_id}/reviews", response_model=MessageResponse, status_code=status.HTTP_201_CREATED, summary="Review product")
def create_review(
    product_id: int,
    review_data: ReviewCreate,
    user: User = Depends(get_current_user),
    service: ProductService = Depends(get_product_service)
):
    """One review per user per product"""
    service.add_review(product_id, user, review_data)
    return MessageResponse(message="Review added successfully")
