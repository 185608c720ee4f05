import pytest
from fastapi.testclient import TestClient

from storefront.api.deps import get_lock_service
from storefront.main import app
from tests.conftest import FakeLockService

CARD = {
    "cardholder_name": "Jan Kowalski",
    "card_number": "4111111111111111",
    "expiry_date": "01/29",
    "cvv": "999",
}


@pytest.fixture
def client():
    lock = FakeLockService()
    app.dependency_overrides[get_lock_service] = lambda: lock
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


def _checkout_body(address, items=None):
    return {
        "items": items or [],
        "shipping_address": address,
        "billing_address": address,
        "payment_method": "card",
    }


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_cart_flow(client, make_product):
    pid = make_product(name="Mouse", price="49.50", stock=10)

    resp = client.post("/cart/items", params={"user_id": 1}, json={"product_id": pid, "quantity": 2})
    assert resp.status_code == 201
    item_id = resp.json()["items"][0]["id"]

    resp = client.patch(f"/cart/items/{item_id}", params={"user_id": 1}, json={"quantity": 4})
    assert resp.json()["total_quantity"] == 4
    assert float(resp.json()["subtotal"]) == 198.0

    resp = client.delete(f"/cart/items/{item_id}", params={"user_id": 1})
    assert resp.json()["items"] == []

    resp = client.delete(f"/cart/items/{item_id}", params={"user_id": 1})
    assert resp.status_code == 404
    assert resp.json()["detail"]["code"] == "item_not_found"

    assert client.delete("/cart", params={"user_id": 1}).status_code == 200

    resp = client.get("/cart", params={"user_id": 1})
    assert resp.status_code == 200
    assert resp.json()["items"] == []


def test_add_unknown_product_is_404(client):
    resp = client.post("/cart/items", params={"user_id": 1}, json={"product_id": 77, "quantity": 1})

    assert resp.status_code == 404
    assert resp.json()["detail"] == {
        "code": "product_not_found",
        "message": "Product with ID 77 not found",
        "product_id": 77,
    }


def test_zero_quantity_rejected_at_boundary(client, make_product):
    pid = make_product()

    resp = client.post("/cart/items", params={"user_id": 1}, json={"product_id": pid, "quantity": 0})

    assert resp.status_code == 422


def test_checkout_pay_and_cancel_flow(client, make_product, address):
    a = make_product(name="A", price="100", stock=5)
    b = make_product(name="B", price="20", stock=1)
    client.post("/cart/items", params={"user_id": 1}, json={"product_id": a, "quantity": 2})
    client.post("/cart/items", params={"user_id": 1}, json={"product_id": b, "quantity": 1})

    resp = client.post("/checkout", params={"user_id": 1}, json=_checkout_body(address))
    assert resp.status_code == 201
    order = resp.json()
    assert float(order["total_amount"]) == 292.0
    assert order["status"] == "pending"
    assert order["shipping_address"]["city"] == "Krakow"

    assert client.get("/cart", params={"user_id": 1}).json()["items"] == []

    resp = client.get(f"/checkout/{order['id']}", params={"user_id": 2})
    assert resp.status_code == 403

    resp = client.post("/payments", params={"user_id": 1}, json={"order_id": order["id"], "card_details": CARD})
    assert resp.status_code == 200
    assert resp.json()["order"]["status"] == "confirmed"
    assert resp.json()["order"]["is_paid"] is True

    resp = client.post("/payments", params={"user_id": 1}, json={"order_id": order["id"], "card_details": CARD})
    assert resp.status_code == 409
    assert resp.json()["detail"]["code"] == "already_paid"

    resp = client.post(f"/orders/{order['id']}/cancel", params={"user_id": 1})
    assert resp.status_code == 200
    assert resp.json()["status"] == "cancelled"


def test_checkout_insufficient_stock_details(client, make_product, address):
    pid = make_product(name="Lamp", stock=5)

    resp = client.post(
        "/checkout",
        params={"user_id": 1},
        json=_checkout_body(address, items=[{"product_id": pid, "quantity": 10}]),
    )

    assert resp.status_code == 409
    detail = resp.json()["detail"]
    assert detail["code"] == "insufficient_stock"
    assert detail["requested"] == 10
    assert detail["available"] == 5


def test_checkout_rejects_bad_address(client, make_product, address):
    pid = make_product()
    body = _checkout_body({**address, "email": "not-an-email"}, items=[{"product_id": pid, "quantity": 1}])

    assert client.post("/checkout", params={"user_id": 1}, json=body).status_code == 422


def test_status_update_requires_admin(client, make_product, address):
    pid = make_product(stock=5)
    order = client.post(
        "/checkout",
        params={"user_id": 1},
        json=_checkout_body(address, items=[{"product_id": pid, "quantity": 1}]),
    ).json()

    resp = client.put(f"/orders/{order['id']}/status", json={"status": "shipped"})
    assert resp.status_code == 403

    resp = client.put(
        f"/orders/{order['id']}/status",
        json={"status": "shipped"},
        headers={"X-User-Role": "admin"},
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "shipped"

    resp = client.post(f"/orders/{order['id']}/cancel", params={"user_id": 1})
    assert resp.status_code == 409
    assert resp.json()["detail"]["current"] == "shipped"


def test_list_orders(client, make_product, address):
    pid = make_product(stock=5)
    for user_id in (1, 1, 2):
        client.post(
            "/checkout",
            params={"user_id": user_id},
            json=_checkout_body(address, items=[{"product_id": pid, "quantity": 1}]),
        )

    mine = client.get("/orders", params={"user_id": 1}).json()
    assert mine["pagination"]["total"] == 2

    everyone = client.get("/orders", params={"user_id": 1}, headers={"X-User-Role": "admin"}).json()
    assert everyone["pagination"]["total"] == 3

    pending = client.get("/orders", params={"user_id": 1, "status": "pending"}).json()
    assert len(pending["data"]) == 2
