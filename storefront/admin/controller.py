from typing import List
from fastapi import APIRouter

from ..auth.authorization import AdminUser
from ..core.config import settings
from ..core.exceptions import UnexpectedError
from ..customers.service import CustomerService
from ..database.core import DbSession
from ..orders.models import ORDER_STATUS_PENDING
from ..orders.service import OrderService
from ..products.service import ProductService
from ..schemas.customers import CustomerResponse
from ..schemas.dashboard import AdminDashboardResponse
from ..schemas.orders import OrderResponse
from ..schemas.products import ProductResponse
from ..logging import logger

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/", response_model=AdminDashboardResponse)
async def dashboard(current_user: AdminUser, db: DbSession):
    """Store totals, recent orders and products running low"""
    try:
        customers = CustomerService.get_all_customers(db)
        products = ProductService.get_all_products(db)
        orders = OrderService.get_all_orders(db)
        low_stock = ProductService.get_low_stock_products(db, settings.LOW_STOCK_THRESHOLD)
        response = AdminDashboardResponse(
            total_customers=len(customers),
            total_products=len(products),
            total_orders=len(orders),
            pending_orders=OrderService.count_by_status(db, ORDER_STATUS_PENDING),
            total_revenue=OrderService.total_revenue(db),
            recent_orders=[OrderResponse.model_validate(o) for o in orders[:settings.RECENT_ORDER_COUNT]],
            low_stock_products=[ProductResponse.model_validate(p) for p in low_stock],
        )
    except Exception as e:
        logger.exception("Error loading admin dashboard")
        raise UnexpectedError("load the dashboard", str(e)) from e

    logger.info(f"Admin {current_user.username} accessed dashboard")
    return response


@router.get("/orders", response_model=List[OrderResponse])
async def manage_orders(current_user: AdminUser, db: DbSession):
    try:
        return OrderService.get_all_orders(db)
    except Exception as e:
        logger.exception("Error loading orders for admin")
        raise UnexpectedError("load orders", str(e)) from e


@router.get("/customers", response_model=List[CustomerResponse])
async def manage_customers(current_user: AdminUser, db: DbSession):
    """Every customer, including deactivated ones"""
    try:
        return CustomerService.get_all_customers(db)
    except Exception as e:
        logger.exception("Error loading customers for admin")
        raise UnexpectedError("load customers", str(e)) from e


@router.get("/products", response_model=List[ProductResponse])
async def manage_products(current_user: AdminUser, db: DbSession):
    try:
        return ProductService.get_all_products(db)
    except Exception as e:
        logger.exception("Error loading products for admin")
        raise UnexpectedError("load products", str(e)) from e
