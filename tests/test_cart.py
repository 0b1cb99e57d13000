# tests/test_cart.py
import pytest
from sqlmodel import select

from app.core.errors import NotFoundError, ValidationError
from app.models.cart import CartItem
from app.repositories.cart_repo import CartRepository
from app.repositories.product_repo import ProductRepository
from app.services.cart_service import CartService


@pytest.fixture
def service():
    return CartService(CartRepository(), ProductRepository())


def _rows(session, user_id):
    session.expire_all()
    return session.exec(select(CartItem).where(CartItem.user_id == user_id)).all()


# -------- service --------


def test_add_twice_merges_into_one_row(session, service, user, product_id):
    pid = product_id("Pearl Necklace")

    service.add_to_cart(session, user["id"], pid, 2)
    item = service.add_to_cart(session, user["id"], pid, 3)

    assert item.quantity == 5
    rows = _rows(session, user["id"])
    assert len(rows) == 1
    assert rows[0].quantity == 5


def test_update_sets_absolute_quantity(session, service, user, product_id):
    pid = product_id("Pearl Necklace")
    service.add_to_cart(session, user["id"], pid, 4)

    item = service.update_quantity(session, user["id"], pid, 7)

    assert item.quantity == 7
    rows = _rows(session, user["id"])
    assert [(r.product_id, r.quantity) for r in rows] == [(pid, 7)]


def test_update_without_existing_row_inserts(session, service, user, product_id):
    pid = product_id("Gold Bracelet")

    item = service.update_quantity(session, user["id"], pid, 7)

    assert item.quantity == 7
    assert len(_rows(session, user["id"])) == 1


@pytest.mark.parametrize("quantity", [0, -1, 1.5, True, "2"])
def test_add_rejects_non_positive_integer(session, service, user, product_id, quantity):
    pid = product_id("Pearl Necklace")

    with pytest.raises(ValidationError, match="positive integer"):
        service.add_to_cart(session, user["id"], pid, quantity)


def test_add_over_stock_names_available_stock(session, service, user, product_id):
    pid = product_id("Ruby Tennis Bracelet")  # stock 3

    with pytest.raises(ValidationError) as exc:
        service.add_to_cart(session, user["id"], pid, 4)

    assert exc.value.message == "Only 3 items available in stock"
    assert _rows(session, user["id"]) == []


def test_update_over_stock_rejected(session, service, user, product_id):
    pid = product_id("Ruby Tennis Bracelet")
    service.add_to_cart(session, user["id"], pid, 1)

    with pytest.raises(ValidationError, match="Only 3 items available"):
        service.update_quantity(session, user["id"], pid, 10)

    assert _rows(session, user["id"])[0].quantity == 1


def test_add_checks_total_stock_not_remaining(session, service, user, product_id):
    pid = product_id("Ruby Tennis Bracelet")  # stock 3

    service.add_to_cart(session, user["id"], pid, 3)
    item = service.add_to_cart(session, user["id"], pid, 3)

    assert item.quantity == 6


def test_add_unknown_product(session, service, user):
    with pytest.raises(NotFoundError):
        service.add_to_cart(session, user["id"], 9999, 1)


def test_summary_total_and_item_count(session, service, user, product_id):
    necklace = product_id("Pearl Necklace")
    bracelet = product_id("Gold Bracelet")
    service.add_to_cart(session, user["id"], necklace, 2)
    service.add_to_cart(session, user["id"], bracelet, 3)

    summary = service.get_cart_summary(session, user["id"])

    assert summary.item_count == 2
    assert summary.total == round(299.99 * 2 + 599.99 * 3, 2)
    assert {line.name for line in summary.items} == {"Pearl Necklace", "Gold Bracelet"}


def test_remove_missing_item(session, service, user, product_id):
    with pytest.raises(NotFoundError, match="Item not found in cart"):
        service.remove_item(session, user["id"], product_id("Pearl Necklace"))


def test_clear_returns_count(session, service, user, product_id):
    service.add_to_cart(session, user["id"], product_id("Pearl Necklace"), 1)
    service.add_to_cart(session, user["id"], product_id("Gold Bracelet"), 1)

    assert service.clear_cart(session, user["id"]) == 2
    assert service.clear_cart(session, user["id"]) == 0


def test_carts_are_per_user(session, service, user, signup, product_id):
    other = signup(email="other@example.com").json()["data"]["user"]
    pid = product_id("Pearl Necklace")

    service.add_to_cart(session, user["id"], pid, 1)
    service.add_to_cart(session, other["id"], pid, 2)

    assert service.get_cart_summary(session, user["id"]).items[0].quantity == 1
    assert service.get_cart_summary(session, other["id"]).items[0].quantity == 2


# -------- API --------


def test_add_endpoint_returns_row(client, auth_headers, user, product_id):
    pid = product_id("Pearl Necklace")

    resp = client.post(
        "/api/cart/add", json={"product_id": pid}, headers=auth_headers
    )

    assert resp.status_code == 201
    row = resp.json()["data"]
    assert row["user_id"] == user["id"]
    assert row["product_id"] == pid
    assert row["quantity"] == 1


def test_add_endpoint_missing_product_id(client, auth_headers):
    resp = client.post("/api/cart/add", json={"quantity": 1}, headers=auth_headers)

    assert resp.status_code == 400
    assert resp.json()["message"] == "Product ID is required"


def test_add_endpoint_unknown_product(client, auth_headers):
    resp = client.post(
        "/api/cart/add",
        json={"product_id": 9999, "quantity": 1},
        headers=auth_headers,
    )

    assert resp.status_code == 404


def test_get_cart_endpoint(client, auth_headers, product_id):
    pid = product_id("Pearl Necklace")
    client.post(
        "/api/cart/add", json={"product_id": pid, "quantity": 2}, headers=auth_headers
    )

    resp = client.get("/api/cart", headers=auth_headers)

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["total"] == 599.98
    assert data["itemCount"] == 1
    line = data["items"][0]
    assert line["name"] == "Pearl Necklace"
    assert line["price"] == 299.99
    assert line["quantity"] == 2
    assert line["image"].startswith("https://")


def test_update_endpoint(client, auth_headers, product_id):
    pid = product_id("Pearl Necklace")
    client.post(
        "/api/cart/add", json={"product_id": pid, "quantity": 2}, headers=auth_headers
    )

    resp = client.put(
        "/api/cart/update",
        json={"product_id": pid, "quantity": 7},
        headers=auth_headers,
    )

    assert resp.status_code == 200
    assert resp.json()["data"]["quantity"] == 7


def test_update_endpoint_requires_both_fields(client, auth_headers, product_id):
    resp = client.put(
        "/api/cart/update",
        json={"product_id": product_id("Pearl Necklace")},
        headers=auth_headers,
    )

    assert resp.status_code == 400
    assert resp.json()["message"] == "Product ID and quantity are required"


def test_remove_endpoint(client, auth_headers, product_id):
    pid = product_id("Pearl Necklace")
    client.post("/api/cart/add", json={"product_id": pid}, headers=auth_headers)

    resp = client.request(
        "DELETE", "/api/cart/remove", json={"product_id": pid}, headers=auth_headers
    )
    again = client.request(
        "DELETE", "/api/cart/remove", json={"product_id": pid}, headers=auth_headers
    )

    assert resp.status_code == 200
    assert resp.json()["message"] == "Item removed from cart successfully"
    assert again.status_code == 404


def test_remove_endpoint_requires_product_id(client, auth_headers):
    resp = client.request("DELETE", "/api/cart/remove", json={}, headers=auth_headers)

    assert resp.status_code == 400
    assert resp.json()["message"] == "Product ID is required"


def test_clear_endpoint(client, auth_headers, product_id):
    for name in ("Pearl Necklace", "Gold Bracelet"):
        client.post(
            "/api/cart/add",
            json={"product_id": product_id(name)},
            headers=auth_headers,
        )

    resp = client.delete("/api/cart/clear", headers=auth_headers)

    assert resp.status_code == 200
    assert resp.json()["data"] == {"itemsRemoved": 2}
    assert client.get("/api/cart", headers=auth_headers).json()["data"]["itemCount"] == 0


@pytest.mark.parametrize("quantity", ["2", True, 1.5])
def test_add_endpoint_rejects_non_integer_quantity(
    client, auth_headers, product_id, quantity
):
    resp = client.post(
        "/api/cart/add",
        json={"product_id": product_id("Pearl Necklace"), "quantity": quantity},
        headers=auth_headers,
    )

    assert resp.status_code == 400
    assert resp.json()["message"] == "Quantity must be a positive integer"
    assert client.get("/api/cart", headers=auth_headers).json()["data"]["itemCount"] == 0


def test_update_endpoint_rejects_boolean_quantity(client, auth_headers, product_id):
    pid = product_id("Pearl Necklace")
    client.post(
        "/api/cart/add", json={"product_id": pid, "quantity": 2}, headers=auth_headers
    )

    resp = client.put(
        "/api/cart/update",
        json={"product_id": pid, "quantity": True},
        headers=auth_headers,
    )

    assert resp.status_code == 400
    assert resp.json()["message"] == "Quantity must be a positive integer"
    assert client.get("/api/cart", headers=auth_headers).json()["data"]["items"][0][
        "quantity"
    ] == 2


def test_whole_number_float_quantity_is_accepted(client, auth_headers, product_id):
    resp = client.post(
        "/api/cart/add",
        json={"product_id": product_id("Pearl Necklace"), "quantity": 3.0},
        headers=auth_headers,
    )

    assert resp.status_code == 201
    assert resp.json()["data"]["quantity"] == 3


@pytest.mark.parametrize("method, path", [("POST", "/api/cart/add"), ("PUT", "/api/cart/update")])
def test_product_id_beyond_integer_range_not_found(client, auth_headers, method, path):
    resp = client.request(
        method,
        path,
        json={"product_id": 99999999999999999999999, "quantity": 1},
        headers=auth_headers,
    )

    assert resp.status_code == 404
    assert resp.json()["message"] == "Product not found"


def test_remove_product_id_beyond_integer_range_not_found(client, auth_headers):
    resp = client.request(
        "DELETE",
        "/api/cart/remove",
        json={"product_id": 99999999999999999999999},
        headers=auth_headers,
    )

    assert resp.status_code == 404
    assert resp.json()["message"] == "Item not found in cart"
