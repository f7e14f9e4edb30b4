from datetime import date, timedelta

import pytest

from app.services.catalog import parse_options


@pytest.mark.parametrize("raw, expected", [
    ("Small, Large", ["Small", "Large"]),
    (" , ", None),
    (["A", " ", "B "], ["A", "B"]),
    (None, None),
])
def test_parse_options(raw, expected):
    assert parse_options(raw) == expected


def test_admin_item_lifecycle(client, admin_headers):
    resp = client.post("/api/v1/admin/items", json={
        "name": " Brownies ", "price": "4.25", "options": "Fudge, Walnut",
    }, headers=admin_headers)
    assert resp.status_code == 201
    item = resp.get_json()["data"]
    assert item["name"] == "Brownies"
    assert item["emoji"] == "🍪"
    assert item["price"] == 4.25
    assert item["options"] == ["Fudge", "Walnut"]
    assert item["in_stock"] is True
    item_id = item["id"]

    resp = client.put(f"/api/v1/admin/items/{item_id}/price", json={"price": 5}, headers=admin_headers)
    assert resp.get_json()["data"]["price"] == 5.0
    resp = client.put(f"/api/v1/admin/items/{item_id}/options", json={"options": ""}, headers=admin_headers)
    assert resp.get_json()["data"]["options"] is None
    resp = client.put(f"/api/v1/admin/items/{item_id}/description", json={"description": "Rich"}, headers=admin_headers)
    assert resp.get_json()["data"]["description"] == "Rich"
    resp = client.post(f"/api/v1/admin/items/{item_id}/stock", headers=admin_headers)
    assert resp.get_json()["data"]["in_stock"] is False

    menu = client.get("/api/v1/menu").get_json()["data"]
    assert [m["id"] for m in menu] == [item_id]

    assert client.delete(f"/api/v1/admin/items/{item_id}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/v1/menu/{item_id}").status_code == 404


def test_add_item_requires_name(client, admin_headers):
    resp = client.post("/api/v1/admin/items", json={"name": "  "}, headers=admin_headers)
    assert resp.status_code == 400


def test_missing_item_is_404(client, admin_headers):
    resp = client.put("/api/v1/admin/items/999/price", json={"price": 1}, headers=admin_headers)
    assert resp.status_code == 404


def test_cart_routes(client, seed_menu):
    cookie, = seed_menu([{"name": "Cookies", "price": 3.5, "options": ["Chocolate Chip", "Oatmeal"]}])

    resp = client.post("/api/v1/cart/add", json={"item_id": cookie})
    lines = resp.get_json()["data"]["lines"]
    assert lines[0]["key"] == f"{cookie}-Chocolate Chip"

    client.post("/api/v1/cart/add", json={"item_id": cookie, "selected_option": "Oatmeal", "quantity": 2})
    client.post("/api/v1/cart/add", json={"item_id": cookie})
    cart = client.get("/api/v1/cart").get_json()["data"]
    assert [(l["key"], l["quantity"]) for l in cart["lines"]] == [
        (f"{cookie}-Chocolate Chip", 2),
        (f"{cookie}-Oatmeal", 2),
    ]
    assert cart["total"] == 14.0
    assert cart["item_count"] == 4

    resp = client.post("/api/v1/cart/update", json={"line_key": f"{cookie}-Oatmeal", "quantity": 0})
    assert [l["key"] for l in resp.get_json()["data"]["lines"]] == [f"{cookie}-Chocolate Chip"]

    resp = client.post("/api/v1/cart/update", json={"line_key": "missing", "quantity": 1})
    assert resp.status_code == 404

    resp = client.post("/api/v1/cart/remove", json={"line_key": f"{cookie}-Chocolate Chip"})
    assert resp.get_json()["data"]["lines"] == []


def test_cart_rejects_bad_adds(client, seed_menu):
    plain, sold_out, flavoured = seed_menu([
        {"name": "Bread", "price": 5},
        {"name": "Pie", "price": 9, "in_stock": False},
        {"name": "Cookies", "price": 3.5, "options": ["Oatmeal"]},
    ])
    assert client.post("/api/v1/cart/add", json={"item_id": 999}).status_code == 404
    assert client.post("/api/v1/cart/add", json={"item_id": sold_out}).status_code == 400
    assert client.post("/api/v1/cart/add", json={"item_id": plain, "selected_option": "Big"}).status_code == 400
    assert client.post("/api/v1/cart/add", json={"item_id": flavoured, "selected_option": "Mint"}).status_code == 400
    assert client.get("/api/v1/cart").get_json()["data"]["lines"] == []


def test_deleting_item_keeps_order_snapshot(client, seed_menu, admin_headers):
    cookie, = seed_menu([{"name": "Cookies", "price": 3.5}])
    client.post("/api/v1/cart/add", json={"item_id": cookie, "quantity": 2})
    resp = client.post("/api/v1/order/submit", json={
        "customer_name": "Theresa",
        "customer_email": "t@example.com",
        "requested_date": (date.today() + timedelta(days=3)).isoformat(),
    })
    order_id = resp.get_json()["data"]["order"]["id"]

    client.delete(f"/api/v1/admin/items/{cookie}", headers=admin_headers)

    order = client.get(f"/api/v1/admin/orders/{order_id}", headers=admin_headers).get_json()["data"]
    assert order["items"][0]["name"] == "Cookies"
    assert order["items"][0]["price"] == 3.5
    assert order["total"] == 7.0


def test_negative_price_rejected(client, admin_headers):
    resp = client.post("/api/v1/admin/items", json={"name": "Pie", "price": -2}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Price cannot be negative"

    item_id = client.post("/api/v1/admin/items", json={"name": "Pie", "price": 9}, headers=admin_headers).get_json()["data"]["id"]
    resp = client.put(f"/api/v1/admin/items/{item_id}/price", json={"price": "-1.50"}, headers=admin_headers)
    assert resp.status_code == 400
    assert client.get(f"/api/v1/menu/{item_id}").get_json()["data"]["price"] == 9.0
