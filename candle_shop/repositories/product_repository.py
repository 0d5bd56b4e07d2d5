"""
Product Repository - Data Access Layer
"""
from typing import List, Optional, Tuple
from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, Query

from candle_shop.errors import BadRequestError
from candle_shop.models.product import Product, Review
from candle_shop.schemas.product import ProductFilters


class ProductRepository:
    """Repository for Product CRUD operations"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def _filtered(self, filters: ProductFilters) -> Query:
        query = self.db.query(Product)
        if filters.keyword:
            query = query.filter(Product.name.icontains(filters.keyword, autoescape=True))
        if filters.category:
            query = query.filter(Product.category == filters.category)
        if filters.scent:
            query = query.filter(Product.scent == filters.scent)
        if filters.min_price is not None:
            query = query.filter(Product.price >= filters.min_price)
        if filters.max_price is not None:
            query = query.filter(Product.price <= filters.max_price)
        return query
    
    def search(self, filters: ProductFilters, page_size: int) -> Tuple[List[Product], int]:
        """Return one page of matching products (newest first) and the total match count"""
        query = self._filtered(filters)
        total = query.count()
        products = query.order_by(
            desc(Product.created_at), desc(Product.id)
        ).offset(page_size * (filters.page - 1)).limit(page_size).all()
        return products, total
    
    def get_featured(self, limit: int) -> List[Product]:
        return self.db.query(Product).filter(
            Product.featured.is_(True)
        ).order_by(desc(Product.created_at), desc(Product.id)).limit(limit).all()
    
    def get_by_id(self, product_id: int, for_update: bool = False) -> Optional[Product]:
        query = self.db.query(Product).filter(Product.id == product_id)
        if for_update:
            query = query.with_for_update()
        return query.first()
    
    def create(self, fields: dict) -> Product:
        product = Product(**fields)
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product
    
    def update(self, product: Product, fields: dict) -> Product:
        for field, value in fields.items():
            setattr(product, field, value)
        self.db.commit()
        self.db.refresh(product)
        return product
    
    def delete(self, product: Product) -> None:
        self.db.delete(product)
        self.db.commit()
    
    def add_review(self, product: Product, review: Review) -> Product:
        """Append a review and recompute the derived rating in the same commit"""
        product.reviews.append(review)
        product.refresh_rating()
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise BadRequestError("Product already reviewed")
        self.db.refresh(product)
        return product
    
    def has_review_from(self, product_id: int, user_id: int) -> bool:
        return self.db.query(Review).filter(
            Review.product_id == product_id,
            Review.user_id == user_id
        ).first() is not None
    
    def decrement_stock(self, product_id: int, quantity: int) -> Optional[Tuple[Product, int]]:
        """
        Subtract quantity from stock without committing
        
        Stock is clamped at zero; the caller owns the transaction.
        
        Returns:
            (product, shortfall) or None if the product no longer exists
        """
        product = self.get_by_id(product_id, for_update=True)
        if not product:
            return None
        new_stock = product.stock - quantity
        shortfall = max(0, -new_stock)
        product.stock = max(0, new_stock)
        return product, shortfall
