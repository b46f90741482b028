from typing import List
from fastapi import APIRouter, Request, status

from ..auth.authorization import AdminUser, CustomerUser, CustomerOrAdmin, is_owner, ensure_owner
from ..auth.models import MessageResponse
from ..core.exceptions import StorefrontError, UnexpectedError
from ..core.flash import flash
from ..database.core import DbSession
from ..schemas.orders import CreateOrderRequest, OrderStatusUpdate, OrderResponse
from ..logging import logger
from .service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.get("/", response_model=List[OrderResponse])
async def list_orders(current_user: CustomerOrAdmin, db: DbSession):
    """Admins see every order; customers only the ones they own"""
    try:
        orders = OrderService.get_all_orders(db)
    except Exception as e:
        logger.exception("Error loading orders")
        raise UnexpectedError("load orders", str(e)) from e

    visible = [o for o in orders if is_owner(current_user, o.customer_name)]
    logger.info(f"User {current_user.username} listed {len(visible)} of {len(orders)} orders")
    return visible


@router.get("/my", response_model=List[OrderResponse])
async def my_orders(current_user: CustomerUser, db: DbSession):
    try:
        orders = OrderService.get_all_orders(db)
    except Exception as e:
        logger.exception(f"Error loading orders for {current_user.username}")
        raise UnexpectedError("load your orders", str(e)) from e

    return [o for o in orders if is_owner(current_user, o.customer_name)]


@router.post("/", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    request: Request,
    order_data: CreateOrderRequest,
    current_user: CustomerOrAdmin,
    db: DbSession
):
    try:
        order = OrderService.create_order(db, order_data.customer_id, order_data.product_id, order_data.quantity)
    except StorefrontError:
        raise
    except Exception as e:
        db.rollback()
        logger.exception(f"Error creating order for customer {order_data.customer_id}")
        raise UnexpectedError("create the order", str(e)) from e

    logger.info(f"User {current_user.username} placed order {order.id}")
    flash(request, "success", "Order created successfully!")
    return order


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, current_user: CustomerOrAdmin, db: DbSession):
    try:
        order = OrderService.get_order_by_id(db, order_id)
    except StorefrontError:
        raise
    except Exception as e:
        logger.exception(f"Error loading order {order_id}")
        raise UnexpectedError("load the order", str(e)) from e

    ensure_owner(current_user, order.customer_name, "order", order_id)
    return order


@router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    request: Request,
    order_id: str,
    status_update: OrderStatusUpdate,
    current_user: AdminUser,
    db: DbSession
):
    try:
        order = OrderService.update_order_status(db, order_id, status_update.status)
    except StorefrontError:
        raise
    except Exception as e:
        db.rollback()
        logger.exception(f"Error updating status of order {order_id}")
        raise UnexpectedError("update the order status", str(e)) from e

    logger.info(f"Admin {current_user.username} set order {order_id} to {order.status}")
    flash(request, "success", f"Order status updated to {order.status}.")
    return order


@router.delete("/{order_id}", response_model=MessageResponse)
async def delete_order(
    request: Request,
    order_id: str,
    current_user: AdminUser,
    db: DbSession
):
    try:
        OrderService.delete_order(db, order_id)
    except StorefrontError:
        raise
    except Exception as e:
        db.rollback()
        logger.exception(f"Error deleting order {order_id}")
        raise UnexpectedError("delete the order", str(e)) from e

    logger.info(f"Admin {current_user.username} deleted order {order_id}")
    message = "Order deleted successfully!"
    flash(request, "success", message)
    return MessageResponse(message=message, redirect="/orders")
