# storefront/cart/service.py
"""
Cart lines and checkout.

Checkout turns every cart line of one username into a Pending order and
removes those lines, all inside one transaction. Checkouts for the same
username are serialised by a per-username lock, and the cart lines are
removed with a conditional delete whose row count must match what was
read; a mismatch means another writer consumed the lines first, so the
whole checkout is rolled back.
"""

import threading
import weakref
from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session

from .models import CartItem
from ..customers.service import CustomerService
from ..orders.models import Order
from ..orders.service import OrderService
from ..products.models import Product
from ..core.exceptions import EmptyCartError, NotFoundError, ValidationError
from ..logging import logger

# A lock lives only while some checkout holds a reference to it
_checkout_locks = weakref.WeakValueDictionary()
_checkout_locks_guard = threading.Lock()


def checkout_lock(username: str) -> threading.Lock:
    key = username.lower()
    with _checkout_locks_guard:
        lock = _checkout_locks.get(key)
        if lock is None:
            lock = _checkout_locks[key] = threading.Lock()
        return lock


class CartService:

    @staticmethod
    def get_cart_items(db: Session, username: str) -> List[CartItem]:
        return db.query(CartItem).filter(CartItem.customer_username == username)\
                 .order_by(CartItem.id).all()

    @staticmethod
    def cart_total(items: List[CartItem]) -> Decimal:
        return sum((item.line_total for item in items), Decimal("0.00"))

    @staticmethod
    def add_to_cart(db: Session, username: str, product_id: str, quantity: int = 1) -> CartItem:
        """Adds a new line priced at the product's current price"""
        if quantity is None or quantity < 1:
            raise ValidationError(field="quantity", user_message="Quantity must be at least 1.")

        product = db.query(Product).filter(Product.id == product_id).first()
        if not product:
            raise NotFoundError("Product", product_id, redirect="/products")

        item = CartItem(
            customer_username=username,
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            unit_price=product.price,
        )
        db.add(item)
        db.commit()
        db.refresh(item)
        logger.info(f"Customer {username} added product {product_id} (qty: {quantity}) to cart")
        return item

    @staticmethod
    def remove_from_cart(db: Session, username: str, cart_item_id: int) -> None:
        """Only the caller's own lines can be removed"""
        item = db.query(CartItem).filter(
            CartItem.id == cart_item_id,
            CartItem.customer_username == username,
        ).first()
        if not item:
            raise NotFoundError("Cart item", cart_item_id, redirect="/cart")
        db.delete(item)
        db.commit()
        logger.info(f"Customer {username} removed cart item {cart_item_id}")

    @staticmethod
    def clear_cart(db: Session, username: str) -> int:
        removed = db.query(CartItem).filter(CartItem.customer_username == username)\
                    .delete(synchronize_session=False)
        db.commit()
        logger.info(f"Customer {username} cleared cart ({removed} items)")
        return removed

    @staticmethod
    def checkout(db: Session, username: str) -> List[Order]:
        """
        Converts the whole cart into orders, or nothing at all.

        Raises EmptyCartError when there are no lines (or they were taken by
        a concurrent checkout) and NotFoundError when no active customer has
        this username or a product has since been deleted. In every failure
        case the cart is left as it was.
        """
        with checkout_lock(username):
            try:
                items = CartService.get_cart_items(db, username)
                if not items:
                    raise EmptyCartError(username)

                customer = CustomerService.find_active_by_username(db, username)
                if not customer:
                    logger.warning(f"Checkout for {username}: no active customer profile with this username")
                    raise NotFoundError("Customer", username, redirect="/cart")

                orders = []
                for item in items:
                    product = db.query(Product).filter(Product.id == item.product_id).first()
                    if not product:
                        raise NotFoundError("Product", item.product_id, redirect="/cart")
                    order = OrderService.build_order(customer, product, item.quantity)
                    db.add(order)
                    orders.append(order)

                line_ids = [item.id for item in items]
                deleted = db.query(CartItem).filter(
                    CartItem.id.in_(line_ids),
                    CartItem.customer_username == username,
                ).delete(synchronize_session=False)
                if deleted != len(line_ids):
                    logger.warning(
                        f"Checkout for {username}: expected to remove {len(line_ids)} cart lines, removed {deleted}"
                    )
                    raise EmptyCartError(username)

                db.commit()
            except Exception:
                db.rollback()
                raise

        for order in orders:
            db.refresh(order)
        logger.info(f"Checkout for {username} placed {len(orders)} orders for customer {customer.id}")
        return orders
