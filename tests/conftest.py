import os

# Settings are read at import time
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ["SEED_DATA"] = "0"
os.environ["RATE_LIMIT_ENABLED"] = "0"
os.environ.setdefault("ENCODING_SECRET_KEY", "test-secret-key-for-the-storefront-suite")

from decimal import Decimal

import pytest
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from storefront.database.core import Base, build_engine, get_db
from storefront.database import models  # noqa: F401
from storefront.users.models import User, Role
from storefront.customers.models import Customer
from storefront.products.models import Product
from storefront.auth.session import issue_credential
from storefront.utils import password_utils
from main import app

# Use an in-memory SQLite database for testing
TEST_SQLALCHEMY_DATABASE_URL = "sqlite://"

CUSTOMER_PASSWORD = "password123"
ADMIN_PASSWORD = "admin123"


@pytest.fixture(scope="function")
def engine():
    engine = build_engine(TEST_SQLALCHEMY_DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine):
    """
    Creates a new, isolated in-memory database session for each test.
    """
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def make_user(db, username, password, role, first_name, last_name, is_active=True):
    user = User(
        username=username,
        email=f"{username}@example.com",
        password_hash=password_utils.get_password_hash(password),
        first_name=first_name,
        last_name=last_name,
        role=role,
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture(scope="function")
def admin_user(db_session):
    return make_user(db_session, "admin", ADMIN_PASSWORD, Role.ADMIN.value, "System", "Administrator")


@pytest.fixture(scope="function")
def customer_user(db_session):
    return make_user(db_session, "alice", CUSTOMER_PASSWORD, Role.CUSTOMER.value, "Alice", "Johnson")


@pytest.fixture(scope="function")
def customer(db_session):
    """The customer profile matching `customer_user`."""
    customer = Customer(
        id="c1",
        name="Alice",
        surname="Johnson",
        username="alice",
        email="alice@example.com",
        shipping_address="1 High St",
    )
    db_session.add(customer)
    db_session.commit()
    db_session.refresh(customer)
    return customer


@pytest.fixture(scope="function")
def product(db_session):
    product = Product(
        id="1",
        name="Laptop",
        description="High-performance laptop with 16GB RAM",
        price=Decimal("999.99"),
        stock_available=10,
    )
    db_session.add(product)
    db_session.commit()
    db_session.refresh(product)
    return product


@pytest.fixture(scope="function")
def client(db_session):
    """
    Creates a TestClient for the app with the database dependency overridden.
    """
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def bearer(user):
    return {"Authorization": f"Bearer {issue_credential(user, remember_me=False).token}"}


@pytest.fixture(scope="function")
def admin_headers(admin_user):
    return bearer(admin_user)


@pytest.fixture(scope="function")
def customer_headers(customer_user):
    return bearer(customer_user)
