from decimal import Decimal

import pytest

from storefront.database.seed import seed_database
from storefront.orders.models import Order
from storefront.products.models import Product
from storefront.users.models import User

from .conftest import bearer


@pytest.fixture
def seeded(db_session):
    seed_database(db_session)


@pytest.fixture
def seeded_admin_headers(db_session, seeded):
    return bearer(db_session.query(User).filter(User.username == "admin").one())


def test_seed_data(db_session, seeded):
    assert {u.username: u.role for u in db_session.query(User).all()} == {"admin": "Admin", "john.doe": "Customer"}
    orders = {o.id: o for o in db_session.query(Order).all()}
    assert orders["1"].status == "Completed"
    assert orders["2"].total_price == Decimal("59.98")


def test_seed_is_idempotent(db_session, seeded):
    seed_database(db_session)
    assert db_session.query(Product).count() == 3


def test_seeded_admin_can_sign_in(client, seeded):
    response = client.post("/account/login", json={"username": "admin", "password": "admin123"})
    assert response.json()["redirect"] == "/admin"


def test_admin_dashboard(client, db_session, seeded, seeded_admin_headers):
    db_session.add(Product(id="4", name="USB Cable", price=Decimal("4.99"), stock_available=3))
    db_session.commit()

    response = client.get("/admin/", headers=seeded_admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["total_customers"] == 2
    assert body["total_products"] == 4
    assert body["total_orders"] == 2
    assert body["pending_orders"] == 1
    assert Decimal(body["total_revenue"]) == Decimal("1059.97")
    assert [o["id"] for o in body["recent_orders"]] == ["2", "1"]
    assert [p["name"] for p in body["low_stock_products"]] == ["USB Cable"]


def test_stock_of_exactly_ten_is_not_low(client, seeded, seeded_admin_headers):
    body = client.get("/admin/", headers=seeded_admin_headers).json()
    assert body["low_stock_products"] == []


def test_admin_listings(client, seeded, seeded_admin_headers):
    assert len(client.get("/admin/orders", headers=seeded_admin_headers).json()) == 2
    assert len(client.get("/admin/customers", headers=seeded_admin_headers).json()) == 2
    assert len(client.get("/admin/products", headers=seeded_admin_headers).json()) == 3


def test_home_for_anonymous_visitor(client, seeded):
    response = client.get("/")

    assert response.status_code == 200
    body = response.json()
    assert (body["total_customers"], body["total_products"], body["total_orders"]) == (2, 3, 2)
    assert Decimal(body["total_revenue"]) == Decimal("1059.97")
    assert len(body["featured_products"]) == 3
    assert body["greeting"] is None


def test_home_greets_signed_in_user(client, seeded, customer_headers):
    assert client.get("/", headers=customer_headers).json()["greeting"] == "Welcome back, Alice!"


def test_home_shows_flash_once(client, seeded):
    client.post("/account/login", json={"username": "john.doe", "password": "password123"})

    first = client.get("/").json()["messages"]
    second = client.get("/").json()["messages"]

    assert {"category": "success", "message": "Welcome back, John!"} in first
    assert second == []


def test_featured_products_are_capped(client, db_session):
    db_session.add_all([
        Product(id=str(i), name=f"Item {i}", price=Decimal("1.00"), stock_available=50) for i in range(8)
    ])
    db_session.commit()

    assert len(client.get("/").json()["featured_products"]) == 6


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
