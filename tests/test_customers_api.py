from storefront.customers.models import Customer


def new_customer(**overrides):
    data = {
        "name": "Jane",
        "surname": "Smith",
        "username": "janesmith",
        "email": "jane@example.com",
        "shipping_address": "456 Oak Ave, City, State",
    }
    data.update(overrides)
    return data


def test_list_shows_active_customers_only(client, db_session, customer, customer_headers):
    db_session.add(Customer(id="c2", name="Old", surname="Account", username="old",
                            email="old@example.com", is_active=False))
    db_session.commit()

    response = client.get("/customers/", headers=customer_headers)

    assert response.status_code == 200
    assert [c["username"] for c in response.json()] == ["alice"]


def test_list_requires_sign_in(client):
    assert client.get("/customers/").status_code == 401


def test_admin_creates_customer_with_generated_id(client, db_session, admin_headers):
    response = client.post("/customers/", json=new_customer(), headers=admin_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["id"]
    assert body["is_active"] is True
    assert body["full_name"] == "Jane Smith"
    assert db_session.query(Customer).count() == 1


def test_admin_creates_customer_with_given_id(client, admin_headers):
    response = client.post("/customers/", json=new_customer(id="42"), headers=admin_headers)
    assert response.json()["id"] == "42"


def test_customer_cannot_create_customers(client, customer_headers):
    assert client.post("/customers/", json=new_customer(), headers=customer_headers).status_code == 403


def test_invalid_email_is_rejected(client, admin_headers):
    response = client.post("/customers/", json=new_customer(email="not-an-email"), headers=admin_headers)
    assert response.status_code == 422


def test_admin_updates_every_field(client, customer, admin_headers):
    response = client.put(
        f"/customers/{customer.id}",
        json=new_customer(name="Alicia", username="alicia", is_active=False),
        headers=admin_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Alicia"
    assert body["username"] == "alicia"
    assert body["is_active"] is False


def test_admin_deletes_customer(client, db_session, customer, admin_headers):
    response = client.delete(f"/customers/{customer.id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["redirect"] == "/customers"
    assert db_session.query(Customer).count() == 0


def test_delete_unknown_customer(client, admin_headers):
    response = client.delete("/customers/missing", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Customer not found."
