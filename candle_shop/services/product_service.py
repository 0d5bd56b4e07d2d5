"""
Product Service - Business Logic Layer
"""
import math
from typing import List

from sqlalchemy.orm import Session

from candle_shop.config import settings
from candle_shop.errors import BadRequestError, NotFoundError
from candle_shop.logging_config import get_logger
from candle_shop.models.product import Product, Review
from candle_shop.models.user import User
from candle_shop.repositories.product_repository import ProductRepository
from candle_shop.schemas.common import PaginatedResponse
from candle_shop.schemas.product import (
    ProductCreate,
    ProductFilters,
    ProductResponse,
    ProductUpdate,
    ReviewCreate,
)

logger = get_logger(__name__)


def _flatten(fields: dict) -> dict:
    """Map the API shape onto model columns"""
    dimensions = fields.pop("dimensions", None)
    if dimensions is not None:
        fields["height"] = dimensions["height"]
        fields["diameter"] = dimensions["diameter"]
    return fields


class ProductService:
    """Service layer for product business logic"""
    
    def __init__(self, db: Session):
        self.repository = ProductRepository(db)
    
    def search_products(self, filters: ProductFilters) -> PaginatedResponse[List[ProductResponse]]:
        """Get one page of the catalog, newest first"""
        page_size = settings.PRODUCTS_PAGE_SIZE
        products, total = self.repository.search(filters, page_size)
        
        return PaginatedResponse[List[ProductResponse]](
            data=[ProductResponse.model_validate(p) for p in products],
            page=filters.page,
            pages=math.ceil(total / page_size),
            total=total
        )
    
    def get_featured_products(self) -> List[ProductResponse]:
        products = self.repository.get_featured(settings.FEATURED_PRODUCTS_LIMIT)
        return [ProductResponse.model_validate(p) for p in products]
    
    def _get_or_404(self, product_id: int) -> Product:
        product = self.repository.get_by_id(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product
    
    def get_product(self, product_id: int) -> ProductResponse:
        return ProductResponse.model_validate(self._get_or_404(product_id))
    
    def create_product(self, product_data: ProductCreate) -> ProductResponse:
        product = self.repository.create(_flatten(product_data.model_dump()))
        logger.info("product_created", product_id=product.id)
        return ProductResponse.model_validate(product)
    
    def update_product(self, product_id: int, product_data: ProductUpdate) -> ProductResponse:
        """Update only the provided fields; the scent rule applies to the merged result"""
        product = self._get_or_404(product_id)
        fields = _flatten(product_data.model_dump(exclude_unset=True))
        
        category = fields.get("category", product.category)
        scent = fields["scent"] if "scent" in fields else product.scent
        if category == "Scented" and not scent:
            raise BadRequestError("Scent is required for scented candles")
        
        product = self.repository.update(product, fields)
        return ProductResponse.model_validate(product)
    
    def delete_product(self, product_id: int) -> None:
        product = self._get_or_404(product_id)
        self.repository.delete(product)
        logger.info("product_deleted", product_id=product_id)
    
    def add_review(self, product_id: int, user: User, review_data: ReviewCreate) -> ProductResponse:
        """
        Add a review from the given user
        
        Raises:
            NotFoundError: If product not found
            BadRequestError: If the user already reviewed this product
        """
        product = self._get_or_404(product_id)
        
        if self.repository.has_review_from(product.id, user.id):
            raise BadRequestError("Product already reviewed")
        
        review = Review(
            user_id=user.id,
            name=user.name,
            rating=review_data.rating,
            comment=review_data.comment,
        )
        product = self.repository.add_review(product, review)
        logger.info("review_added", product_id=product.id, user_id=user.id, rating=product.rating)
        return ProductResponse.model_validate(product)
