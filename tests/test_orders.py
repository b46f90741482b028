from decimal import Decimal

import pytest

from storefront.core.exceptions import NotFoundError, ValidationError
from storefront.customers.models import Customer
from storefront.orders.models import Order
from storefront.orders.service import OrderService
from storefront.products.models import Product


@pytest.mark.parametrize(
    "quantity, expected_total",
    [(1, Decimal("999.99")), (5, Decimal("4999.95")), (1000, Decimal("999990.00"))],
)
def test_total_is_unit_price_times_quantity(db_session, customer, product, quantity, expected_total):
    order = OrderService.create_order(db_session, customer.id, product.id, quantity)

    assert order.unit_price == Decimal("999.99")
    assert order.total_price == expected_total
    assert order.total_price == order.unit_price * quantity


def test_new_order_is_pending_with_name_snapshots(db_session, customer, product):
    order = OrderService.create_order(db_session, customer.id, product.id, 1)

    assert order.status == "Pending"
    assert order.customer_name == "Alice Johnson"
    assert order.product_name == "Laptop"


def test_snapshots_survive_later_edits(db_session, customer, product):
    order = OrderService.create_order(db_session, customer.id, product.id, 2)

    product.price = Decimal("1.00")
    product.name = "Renamed"
    customer.surname = "Smith"
    db_session.commit()
    db_session.refresh(order)

    assert order.unit_price == Decimal("999.99")
    assert order.total_price == Decimal("1999.98")
    assert order.product_name == "Laptop"
    assert order.customer_name == "Alice Johnson"


def test_seed_example_order(db_session):
    db_session.add(Customer(id="1", name="John", surname="Doe", username="johndoe", email="john@example.com"))
    db_session.add(Product(id="1", name="Laptop", price=Decimal("999.99"), stock_available=10))
    db_session.commit()

    order = OrderService.create_order(db_session, "1", "1", 1)

    assert (order.unit_price, order.total_price, order.status) == (Decimal("999.99"), Decimal("999.99"), "Pending")


def test_unknown_customer_or_product_is_not_found(db_session, customer, product):
    with pytest.raises(NotFoundError):
        OrderService.create_order(db_session, "missing", product.id, 1)
    with pytest.raises(NotFoundError):
        OrderService.create_order(db_session, customer.id, "missing", 1)
    assert db_session.query(Order).count() == 0


@pytest.mark.parametrize("quantity", [0, -3])
def test_quantity_must_be_positive(db_session, customer, product, quantity):
    with pytest.raises(ValidationError):
        OrderService.create_order(db_session, customer.id, product.id, quantity)
    assert db_session.query(Order).count() == 0


def test_status_accepts_any_value(db_session, customer, product):
    order = OrderService.create_order(db_session, customer.id, product.id, 1)

    assert OrderService.update_order_status(db_session, order.id, "Completed").status == "Completed"
    assert OrderService.update_order_status(db_session, order.id, "Awaiting courier").status == "Awaiting courier"
    assert OrderService.update_order_status(db_session, order.id, "Pending").status == "Pending"


def test_status_length_is_bounded(db_session, customer, product):
    order = OrderService.create_order(db_session, customer.id, product.id, 1)
    with pytest.raises(ValidationError):
        OrderService.update_order_status(db_session, order.id, "x" * 51)
    with pytest.raises(ValidationError):
        OrderService.update_order_status(db_session, order.id, "   ")


def test_status_update_and_delete_of_unknown_order(db_session):
    with pytest.raises(NotFoundError):
        OrderService.update_order_status(db_session, "missing", "Completed")
    with pytest.raises(NotFoundError):
        OrderService.delete_order(db_session, "missing")


def test_deleting_product_keeps_orders(db_session, customer, product):
    order = OrderService.create_order(db_session, customer.id, product.id, 1)
    db_session.delete(product)
    db_session.commit()

    assert OrderService.get_order_by_id(db_session, order.id).product_name == "Laptop"


# --- HTTP ---

def test_customer_sees_only_owned_orders(client, db_session, customer, product, customer_headers):
    bob = Customer(id="c2", name="Bob", surname="Stone", username="bob", email="bob@example.com")
    db_session.add(bob)
    db_session.commit()
    OrderService.create_order(db_session, customer.id, product.id, 1)
    OrderService.create_order(db_session, bob.id, product.id, 1)

    response = client.get("/orders/", headers=customer_headers)

    assert response.status_code == 200
    assert [o["customer_name"] for o in response.json()] == ["Alice Johnson"]


def test_admin_sees_all_orders_newest_first(client, db_session, customer, product, admin_headers):
    first = OrderService.create_order(db_session, customer.id, product.id, 1)
    second = OrderService.create_order(db_session, customer.id, product.id, 2)

    response = client.get("/orders/", headers=admin_headers)

    assert [o["id"] for o in response.json()] == [second.id, first.id]


def test_my_orders_is_customer_only(client, admin_headers):
    assert client.get("/orders/my", headers=admin_headers).status_code == 403


def test_create_order_over_http(client, customer, product, customer_headers):
    response = client.post(
        "/orders/",
        json={"customer_id": customer.id, "product_id": product.id, "quantity": 5},
        headers=customer_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert Decimal(body["total_price"]) == Decimal("4999.95")
    assert body["status"] == "Pending"


def test_create_order_with_unknown_product(client, customer, customer_headers):
    response = client.post(
        "/orders/",
        json={"customer_id": customer.id, "product_id": "nope", "quantity": 1},
        headers=customer_headers,
    )
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_order_details_enforce_ownership(client, db_session, product, customer_headers):
    bob = Customer(id="c2", name="Bob", surname="Stone", username="bob", email="bob@example.com")
    db_session.add(bob)
    db_session.commit()
    order = OrderService.create_order(db_session, bob.id, product.id, 1)

    response = client.get(f"/orders/{order.id}", headers=customer_headers)

    assert response.status_code == 403
    assert response.json()["redirect"] == "/account/access-denied"


def test_status_update_is_admin_only(client, db_session, customer, product, customer_headers, admin_headers):
    order = OrderService.create_order(db_session, customer.id, product.id, 1)

    denied = client.put(f"/orders/{order.id}/status", json={"status": "Completed"}, headers=customer_headers)
    assert denied.status_code == 403

    allowed = client.put(f"/orders/{order.id}/status", json={"status": "Completed"}, headers=admin_headers)
    assert allowed.status_code == 200
    assert allowed.json()["status"] == "Completed"


def test_admin_deletes_order(client, db_session, customer, product, admin_headers):
    order = OrderService.create_order(db_session, customer.id, product.id, 1)

    response = client.delete(f"/orders/{order.id}", headers=admin_headers)

    assert response.status_code == 200
    assert db_session.query(Order).count() == 0
    assert client.delete(f"/orders/{order.id}", headers=admin_headers).status_code == 404
