from fastapi import APIRouter, Request, status

from ..auth.authorization import CustomerUser
from ..auth.models import MessageResponse
from ..core.exceptions import StorefrontError, EmptyCartError, UnexpectedError
from ..core.flash import flash
from ..customers.service import CustomerService
from ..database.core import DbSession
from ..schemas.customers import CustomerResponse
from ..schemas.orders import OrderResponse
from ..schemas.cart import (
    AddToCartRequest,
    CartItemResponse,
    CartResponse,
    CheckoutPreviewResponse,
    CheckoutResponse,
)
from ..logging import logger
from .service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])


@router.get("/", response_model=CartResponse)
async def view_cart(current_user: CustomerUser, db: DbSession):
    try:
        items = CartService.get_cart_items(db, current_user.username)
    except Exception as e:
        logger.exception(f"Error loading cart for {current_user.username}")
        raise UnexpectedError("load your cart", str(e)) from e

    return CartResponse(
        items=[CartItemResponse.model_validate(item) for item in items],
        item_count=len(items),
        total=CartService.cart_total(items),
    )


@router.post("/items", response_model=CartItemResponse, status_code=status.HTTP_201_CREATED)
async def add_to_cart(
    request: Request,
    cart_data: AddToCartRequest,
    current_user: CustomerUser,
    db: DbSession
):
    try:
        item = CartService.add_to_cart(db, current_user.username, cart_data.product_id, cart_data.quantity)
    except StorefrontError:
        raise
    except Exception as e:
        db.rollback()
        logger.exception(f"Error adding product {cart_data.product_id} to cart for {current_user.username}")
        raise UnexpectedError("add the item to your cart", str(e)) from e

    flash(request, "success", "Item added to cart successfully!")
    return item


@router.delete("/items/{cart_item_id}", response_model=MessageResponse)
async def remove_from_cart(
    request: Request,
    cart_item_id: int,
    current_user: CustomerUser,
    db: DbSession
):
    try:
        CartService.remove_from_cart(db, current_user.username, cart_item_id)
    except StorefrontError:
        raise
    except Exception as e:
        db.rollback()
        logger.exception(f"Error removing cart item {cart_item_id}")
        raise UnexpectedError("remove the item", str(e)) from e

    message = "Item removed from cart."
    flash(request, "success", message)
    return MessageResponse(message=message, redirect="/cart")


@router.delete("/", response_model=MessageResponse)
async def clear_cart(request: Request, current_user: CustomerUser, db: DbSession):
    try:
        CartService.clear_cart(db, current_user.username)
    except Exception as e:
        db.rollback()
        logger.exception(f"Error clearing cart for {current_user.username}")
        raise UnexpectedError("clear your cart", str(e)) from e

    message = "Cart cleared."
    flash(request, "success", message)
    return MessageResponse(message=message, redirect="/cart")


@router.get("/checkout", response_model=CheckoutPreviewResponse)
async def checkout_preview(current_user: CustomerUser, db: DbSession):
    """What a checkout would place right now"""
    try:
        items = CartService.get_cart_items(db, current_user.username)
        customer = CustomerService.find_active_by_username(db, current_user.username)
    except Exception as e:
        logger.exception(f"Error loading checkout for {current_user.username}")
        raise UnexpectedError("load checkout", str(e)) from e

    if not items:
        raise EmptyCartError(current_user.username)

    return CheckoutPreviewResponse(
        items=[CartItemResponse.model_validate(item) for item in items],
        total=CartService.cart_total(items),
        customer=CustomerResponse.model_validate(customer) if customer else None,
    )


@router.post("/checkout", response_model=CheckoutResponse)
def process_checkout(request: Request, current_user: CustomerUser, db: DbSession):
    # Sync endpoint: runs in the threadpool so the checkout lock never blocks the event loop
    try:
        orders = CartService.checkout(db, current_user.username)
    except StorefrontError:
        raise
    except Exception as e:
        logger.exception(f"Error during checkout for {current_user.username}")
        raise UnexpectedError("process checkout", str(e)) from e

    message = "Checkout successful! Your orders have been placed."
    flash(request, "success", message)
    logger.info(f"Customer {current_user.username} completed checkout with {len(orders)} orders")
    return CheckoutResponse(
        message=message,
        orders=[OrderResponse.model_validate(order) for order in orders],
        redirect="/orders/my",
    )
