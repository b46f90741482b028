from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import List
from decimal import Decimal
from datetime import datetime, timezone
import uuid

from .models import Order, ORDER_STATUS_PENDING
from ..customers.models import Customer
from ..products.models import Product
from ..core.exceptions import NotFoundError, ValidationError
from ..logging import logger

MAX_STATUS_LENGTH = 50


class OrderService:

    @staticmethod
    def build_order(customer: Customer, product: Product, quantity: int) -> Order:
        """
        New Pending order priced at the product's current price.

        Customer and product names are copied onto the order; nothing is
        written to the session.
        """
        if quantity is None or quantity < 1:
            raise ValidationError(field="quantity", user_message="Quantity must be at least 1.")

        unit_price = Decimal(product.price)
        return Order(
            id=str(uuid.uuid4()),
            customer_id=customer.id,
            customer_name=customer.full_name,
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            unit_price=unit_price,
            total_price=unit_price * quantity,
            status=ORDER_STATUS_PENDING,
            order_date=datetime.now(timezone.utc),
        )

    @staticmethod
    def create_order(db: Session, customer_id: str, product_id: str, quantity: int) -> Order:
        """Place a single order"""
        if quantity is None or quantity < 1:
            raise ValidationError(field="quantity", user_message="Quantity must be at least 1.")

        customer = db.query(Customer).filter(Customer.id == customer_id).first()
        if not customer:
            raise NotFoundError("Customer", customer_id, redirect="/orders")

        product = db.query(Product).filter(Product.id == product_id).first()
        if not product:
            raise NotFoundError("Product", product_id, redirect="/orders")

        order = OrderService.build_order(customer, product, quantity)
        db.add(order)
        db.commit()
        db.refresh(order)

        logger.info(
            f"Order {order.id} created for {order.customer_name}: "
            f"{order.quantity} x {order.product_name} = {order.total_price}"
        )
        return order

    @staticmethod
    def get_order_by_id(db: Session, order_id: str) -> Order:
        order = db.query(Order).filter(Order.id == order_id).first()
        if not order:
            logger.warning(f"Order not found with ID: {order_id}")
            raise NotFoundError("Order", order_id, redirect="/orders")
        return order

    @staticmethod
    def get_all_orders(db: Session) -> List[Order]:
        """All orders, newest first"""
        return db.query(Order).order_by(Order.order_date.desc()).all()

    @staticmethod
    def get_recent_orders(db: Session, limit: int) -> List[Order]:
        return db.query(Order).order_by(Order.order_date.desc()).limit(limit).all()

    @staticmethod
    def count_by_status(db: Session, status: str) -> int:
        return db.query(func.count(Order.id)).filter(Order.status == status).scalar() or 0

    @staticmethod
    def total_revenue(db: Session) -> Decimal:
        total = db.query(func.sum(Order.total_price)).scalar()
        return Decimal(total) if total is not None else Decimal("0.00")

    @staticmethod
    def update_order_status(db: Session, order_id: str, new_status: str) -> Order:
        """Overwrites the status; there is no transition check"""
        new_status = (new_status or "").strip()
        if not new_status or len(new_status) > MAX_STATUS_LENGTH:
            raise ValidationError(
                field="status",
                user_message=f"Status must be between 1 and {MAX_STATUS_LENGTH} characters.",
            )

        order = OrderService.get_order_by_id(db, order_id)
        old_status = order.status
        order.status = new_status
        db.commit()
        db.refresh(order)
        logger.info(f"Order {order_id} status changed from {old_status} to {new_status}")
        return order

    @staticmethod
    def delete_order(db: Session, order_id: str) -> None:
        order = OrderService.get_order_by_id(db, order_id)
        db.delete(order)
        db.commit()
        logger.info(f"Order deleted: {order_id}")
