from typing import List, Optional
from fastapi import APIRouter, Request, status

from ..auth.authorization import AdminUser, OptionalUser
from ..auth.models import MessageResponse
from ..core.exceptions import StorefrontError, UnexpectedError
from ..core.flash import flash
from ..database.core import DbSession
from ..schemas.products import ProductCreate, ProductUpdate, ProductResponse
from ..logging import logger
from .service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("/", response_model=List[ProductResponse])
async def list_products(db: DbSession):
    try:
        return ProductService.get_all_products(db)
    except Exception as e:
        logger.exception("Error loading products")
        raise UnexpectedError("load products", str(e)) from e


@router.get("/search", response_model=List[ProductResponse])
async def search_products(db: DbSession, current_user: OptionalUser, q: Optional[str] = None):
    """Search by name or description"""
    try:
        products = ProductService.search_products(db, q)
    except Exception as e:
        logger.exception(f"Error searching products for '{q}'")
        raise UnexpectedError("search products", str(e)) from e
    logger.info(
        f"Product search '{q}' by {current_user.username if current_user else 'Anonymous'}: {len(products)} results"
    )
    return products


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str, db: DbSession):
    try:
        return ProductService.get_product_by_id(db, product_id)
    except StorefrontError:
        raise
    except Exception as e:
        logger.exception(f"Error loading product {product_id}")
        raise UnexpectedError("load the product", str(e)) from e


@router.post("/", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    request: Request,
    product_data: ProductCreate,
    current_user: AdminUser,
    db: DbSession
):
    try:
        product = ProductService.create_product(db, product_data)
    except StorefrontError:
        raise
    except Exception as e:
        db.rollback()
        logger.exception(f"Error creating product {product_data.name}")
        raise UnexpectedError("create the product", str(e)) from e

    logger.info(f"Admin {current_user.username} created product {product.id}")
    flash(request, "success", "Product created successfully!")
    return product


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    request: Request,
    product_id: str,
    product_data: ProductUpdate,
    current_user: AdminUser,
    db: DbSession
):
    try:
        product = ProductService.update_product(db, product_id, product_data)
    except StorefrontError:
        raise
    except Exception as e:
        db.rollback()
        logger.exception(f"Error updating product {product_id}")
        raise UnexpectedError("update the product", str(e)) from e

    logger.info(f"Admin {current_user.username} updated product {product_id}")
    flash(request, "success", "Product updated successfully!")
    return product


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    request: Request,
    product_id: str,
    current_user: AdminUser,
    db: DbSession
):
    try:
        ProductService.delete_product(db, product_id)
    except StorefrontError:
        raise
    except Exception as e:
        db.rollback()
        logger.exception(f"Error deleting product {product_id}")
        raise UnexpectedError("delete the product", str(e)) from e

    logger.info(f"Admin {current_user.username} deleted product {product_id}")
    message = "Product deleted successfully!"
    flash(request, "success", message)
    return MessageResponse(message=message, redirect="/products")
