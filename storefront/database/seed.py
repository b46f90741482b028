# storefront/database/seed.py
"""Demo accounts, customers, products and orders for a fresh store."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy.orm import Session

from ..users.models import User, Role
from ..customers.models import Customer
from ..products.models import Product
from ..orders.models import Order, ORDER_STATUS_COMPLETED, ORDER_STATUS_PENDING
from ..utils.password_utils import get_password_hash
from ..logging import logger


def seed_users(db: Session) -> None:
    if db.query(User).first():
        return
    db.add_all([
        User(
            id="1",
            username="admin",
            email="admin@abcretail.com",
            password_hash=get_password_hash("admin123"),
            first_name="System",
            last_name="Administrator",
            role=Role.ADMIN.value,
        ),
        User(
            id="2",
            username="john.doe",
            email="john.doe@example.com",
            password_hash=get_password_hash("password123"),
            first_name="John",
            last_name="Doe",
            role=Role.CUSTOMER.value,
        ),
    ])
    db.commit()
    logger.info("Seeded 2 users")


def seed_customers(db: Session) -> None:
    if db.query(Customer).first():
        return
    db.add_all([
        Customer(id="1", name="John", surname="Doe", username="johndoe",
                 email="john@example.com", shipping_address="123 Main St, City, State"),
        Customer(id="2", name="Jane", surname="Smith", username="janesmith",
                 email="jane@example.com", shipping_address="456 Oak Ave, City, State"),
    ])
    db.commit()
    logger.info("Seeded 2 customers")


def seed_products(db: Session) -> None:
    if db.query(Product).first():
        return
    db.add_all([
        Product(id="1", name="Laptop", description="High-performance laptop with 16GB RAM",
                price=Decimal("999.99"), stock_available=10),
        Product(id="2", name="Wireless Mouse", description="Ergonomic wireless mouse",
                price=Decimal("29.99"), stock_available=25),
        Product(id="3", name="Mechanical Keyboard", description="RGB mechanical keyboard",
                price=Decimal("89.99"), stock_available=15),
    ])
    db.commit()
    logger.info("Seeded 3 products")


def seed_orders(db: Session) -> None:
    if db.query(Order).first():
        return
    now = datetime.now(timezone.utc)
    db.add_all([
        Order(id="1", customer_id="1", customer_name="John Doe", product_id="1", product_name="Laptop",
              order_date=now - timedelta(days=2), quantity=1,
              unit_price=Decimal("999.99"), total_price=Decimal("999.99"), status=ORDER_STATUS_COMPLETED),
        Order(id="2", customer_id="2", customer_name="Jane Smith", product_id="2", product_name="Wireless Mouse",
              order_date=now - timedelta(days=1), quantity=2,
              unit_price=Decimal("29.99"), total_price=Decimal("59.98"), status=ORDER_STATUS_PENDING),
    ])
    db.commit()
    logger.info("Seeded 2 orders")


def seed_database(db: Session) -> None:
    """Fills each table that is still empty"""
    seed_users(db)
    seed_customers(db)
    seed_products(db)
    seed_orders(db)
