"""Integration tests for checkout and order history endpoints."""


def _fill_cart(client, auth, product_id, quantity=1):
    response = client.post("/cart/add", json={"product_id": product_id, "quantity": quantity}, headers=auth)
    assert response.status_code == 200


def _checkout(client, auth, address_id, payment_method="card"):
    return client.post(
        "/orders",
        json={"shipping_address_id": address_id, "payment_method": payment_method},
        headers=auth,
    )


class TestPlaceOrderAPI:
    def test_checkout(self, client, auth, product, address_id):
        _fill_cart(client, auth, product["id"], 3)
        response = _checkout(client, auth, address_id)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Order created successfully!"
        order = body["order"]
        assert order["total_amount"] == 4497.0
        assert order["items"][0]["quantity"] == 3
        assert order["shipping_address"]["city"] == "Kolkata"
        assert order["payment_status"] == "pending"
        assert order["order_status"] == "pending"

        assert client.get("/cart", headers=auth).json()["items"] == []
        assert client.get("/user/profile", headers=auth).json()["orders"] == [order["id"]]
        assert client.get(f"/products/{product['id']}").json()["stock_quantity"] == 2

    def test_empty_cart(self, client, auth, address_id):
        response = _checkout(client, auth, address_id)
        assert response.status_code == 400
        assert response.json() == {"error": {"cart": ["Cart is empty"]}}

    def test_invalid_address(self, client, auth, product):
        _fill_cart(client, auth, product["id"])
        response = _checkout(client, auth, "missing")
        assert response.status_code == 400

    def test_insufficient_stock(self, client, auth, product, address_id):
        _fill_cart(client, auth, product["id"], 6)
        response = _checkout(client, auth, address_id)
        assert response.status_code == 400
        assert len(client.get("/cart", headers=auth).json()["items"]) == 1

    def test_missing_payment_method(self, client, auth, address_id):
        response = client.post("/orders", json={"shipping_address_id": address_id}, headers=auth)
        assert response.status_code == 422


class TestReadOrdersAPI:
    def test_list_newest_first(self, client, auth, product, address_id):
        _fill_cart(client, auth, product["id"])
        first = _checkout(client, auth, address_id).json()["order"]["id"]
        _fill_cart(client, auth, product["id"])
        second = _checkout(client, auth, address_id).json()["order"]["id"]

        response = client.get("/orders", headers=auth)
        assert response.status_code == 200
        assert [o["id"] for o in response.json()] == [second, first]

    def test_get_own_order(self, client, auth, product, address_id):
        _fill_cart(client, auth, product["id"])
        order_id = _checkout(client, auth, address_id).json()["order"]["id"]

        response = client.get(f"/orders/{order_id}", headers=auth)
        assert response.status_code == 200
        assert response.json()["id"] == order_id

    def test_cannot_read_another_customers_order(self, client, login, auth, product, address_id):
        _fill_cart(client, auth, product["id"])
        order_id = _checkout(client, auth, address_id).json()["order"]["id"]

        other, _ = login("firebase-uid-002", "ravi@example.com")
        response = client.get(f"/orders/{order_id}", headers=other)
        assert response.status_code == 404
