from decimal import Decimal

import pytest

from storefront.products.models import Product


@pytest.fixture
def catalog(db_session):
    db_session.add_all([
        Product(id="1", name="Laptop", description="High-performance laptop with 16GB RAM",
                price=Decimal("999.99"), stock_available=10),
        Product(id="2", name="Wireless Mouse", description="Ergonomic wireless mouse",
                price=Decimal("29.99"), stock_available=25),
        Product(id="3", name="Mechanical Keyboard", description="RGB mechanical keyboard",
                price=Decimal("89.99"), stock_available=15),
    ])
    db_session.commit()


def test_catalog_is_public(client, catalog):
    response = client.get("/products/")

    assert response.status_code == 200
    assert len(response.json()) == 3


def test_product_details(client, catalog):
    body = client.get("/products/2").json()
    assert body["name"] == "Wireless Mouse"
    assert Decimal(body["price"]) == Decimal("29.99")


def test_unknown_product_is_not_found(client):
    response = client.get("/products/99")
    assert response.status_code == 404
    assert response.json()["redirect"] == "/products"


@pytest.mark.parametrize(
    "term, expected",
    [
        ("MOUSE", {"Wireless Mouse"}),
        ("rgb", {"Mechanical Keyboard"}),
        ("wireless", {"Wireless Mouse"}),
        ("e", {"Laptop", "Wireless Mouse", "Mechanical Keyboard"}),
        ("tablet", set()),
    ],
)
def test_search_matches_name_or_description(client, catalog, term, expected):
    response = client.get("/products/search", params={"q": term})
    assert {p["name"] for p in response.json()} == expected


def test_blank_search_returns_everything(client, catalog):
    assert len(client.get("/products/search").json()) == 3


def test_admin_creates_product(client, db_session, admin_headers):
    response = client.post(
        "/products/",
        json={"name": "Monitor", "description": "27 inch", "price": "249.50", "stock_available": 4},
        headers=admin_headers,
    )

    assert response.status_code == 201
    created = db_session.query(Product).filter(Product.id == response.json()["id"]).one()
    assert created.price == Decimal("249.50")


def test_customer_cannot_create_product(client, customer_headers):
    response = client.post("/products/", json={"name": "Monitor", "price": "1.00"}, headers=customer_headers)
    assert response.status_code == 403


@pytest.mark.parametrize("field, value", [("price", "-1.00"), ("stock_available", -1)])
def test_negative_price_or_stock_is_rejected(client, admin_headers, field, value):
    data = {"name": "Monitor", "price": "10.00", "stock_available": 1}
    data[field] = value

    response = client.post("/products/", json=data, headers=admin_headers)

    assert response.status_code == 422
    assert response.json()["error"]["details"][0]["field"] == field


def test_admin_updates_product(client, catalog, admin_headers):
    response = client.put(
        "/products/2",
        json={"name": "Silent Mouse", "description": "Quiet clicks", "price": "34.99", "stock_available": 30},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Silent Mouse"


def test_admin_deletes_product(client, db_session, catalog, admin_headers):
    assert client.delete("/products/3", headers=admin_headers).status_code == 200
    assert db_session.query(Product).count() == 2
    assert client.delete("/products/3", headers=admin_headers).status_code == 404
