from typing import List
from uuid import uuid4

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from .models import Product
from ..schemas.products import ProductCreate, ProductUpdate
from ..core.exceptions import NotFoundError
from ..logging import logger


class ProductService:

    @staticmethod
    def get_all_products(db: Session) -> List[Product]:
        return db.query(Product).order_by(Product.name).all()

    @staticmethod
    def get_product_by_id(db: Session, product_id: str) -> Product:
        product = db.query(Product).filter(Product.id == product_id).first()
        if not product:
            logger.warning(f"Product not found with ID: {product_id}")
            raise NotFoundError("Product", product_id, redirect="/products")
        return product

    @staticmethod
    def search_products(db: Session, term: str) -> List[Product]:
        """Case-insensitive substring match on name or description; a blank term returns everything"""
        term = (term or "").strip()
        if not term:
            return ProductService.get_all_products(db)
        pattern = f"%{term.lower()}%"
        return db.query(Product).filter(
            or_(
                func.lower(Product.name).like(pattern),
                func.lower(Product.description).like(pattern),
            )
        ).order_by(Product.name).all()

    @staticmethod
    def get_low_stock_products(db: Session, threshold: int) -> List[Product]:
        return db.query(Product).filter(Product.stock_available < threshold)\
                 .order_by(Product.stock_available).all()

    @staticmethod
    def create_product(db: Session, product_data: ProductCreate) -> Product:
        product = Product(
            id=product_data.id or str(uuid4()),
            name=product_data.name,
            description=product_data.description,
            price=product_data.price,
            stock_available=product_data.stock_available,
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        logger.info(f"Product created: {product.id} ({product.name}) at {product.price}")
        return product

    @staticmethod
    def update_product(db: Session, product_id: str, product_data: ProductUpdate) -> Product:
        product = ProductService.get_product_by_id(db, product_id)
        product.name = product_data.name
        product.description = product_data.description
        product.price = product_data.price
        product.stock_available = product_data.stock_available
        db.commit()
        db.refresh(product)
        logger.info(f"Product updated: {product.id}")
        return product

    @staticmethod
    def delete_product(db: Session, product_id: str) -> None:
        """Orders keep their product snapshot"""
        product = ProductService.get_product_by_id(db, product_id)
        db.delete(product)
        db.commit()
        logger.info(f"Product deleted: {product_id}")
