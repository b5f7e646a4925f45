"""Shopper load test scenarios.

Two stateful SequentialTaskSet journeys: a browse-to-checkout conversion
and a cart churn journey that edits and abandons its cart.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import address_data, cart_item_data, checkout_data, shopper_identity
from loadtests.helpers.auth import bearer, shopper_token
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


class _ShopperJourney(SequentialTaskSet):
    """Common login and browsing steps."""

    def on_start(self):
        self.state = ShopperState()
        subject_id, email, name = shopper_identity()
        self.state.token = shopper_token(subject_id, email, name)

    @property
    def headers(self):
        return bearer(self.state.token)

    def login(self):
        with self.client.post(
            "/auth/login",
            headers=self.headers,
            catch_response=True,
            name="POST /auth/login",
        ) as resp:
            if resp.status_code == 200:
                self.state.customer_id = resp.json()["customer"]["id"]
            else:
                resp.failure(f"Login failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    def browse(self):
        with self.client.get("/products", catch_response=True, name="GET /products") as resp:
            if resp.status_code != 200:
                resp.failure(f"Browse failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()
                return
            products = [p for p in resp.json() if p["stock_quantity"] > 10]
            if not products:
                resp.failure("No stocked products to buy; run CatalogueAdminUser first")
                self.interrupt()
                return
            self.products = random.sample(products, k=min(3, len(products)))
            self.state.product_ids = [p["id"] for p in self.products]

    def add_item(self, product):
        with self.client.post(
            "/cart/add",
            json=cart_item_data(product),
            headers=self.headers,
            catch_response=True,
            name="POST /cart/add",
        ) as resp:
            if resp.status_code == 200:
                self.state.cart_lines = len(resp.json()["cart"]["items"])
            else:
                resp.failure(f"Add to cart failed: {resp.status_code} - {extract_error_detail(resp)}")


class BrowseToCheckoutJourney(_ShopperJourney):
    """Login -> Browse -> Add Items -> Add Address -> Checkout -> View Orders."""

    @task
    def sign_in(self):
        self.login()

    @task
    def browse_products(self):
        self.browse()

    @task
    def add_items(self):
        for product in self.products:
            self.add_item(product)

    @task
    def view_cart(self):
        self.client.get("/cart", headers=self.headers, name="GET /cart")

    @task
    def add_address(self):
        with self.client.post(
            "/user/addresses",
            json=address_data(),
            headers=self.headers,
            catch_response=True,
            name="POST /user/addresses",
        ) as resp:
            if resp.status_code == 201:
                self.state.address_id = resp.json()["addresses"][-1]["id"]
            else:
                resp.failure(f"Add address failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def checkout(self):
        with self.client.post(
            "/orders",
            json=checkout_data(self.state.address_id),
            headers=self.headers,
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["order"]["id"])
            elif resp.status_code == 400:
                # Stock ran out under concurrent checkouts
                resp.success()
            else:
                resp.failure(f"Checkout failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def view_orders(self):
        self.client.get("/orders", headers=self.headers, name="GET /orders")
        for order_id in self.state.order_ids:
            self.client.get(f"/orders/{order_id}", headers=self.headers, name="GET /orders/{id}")
        self.interrupt()


class CartChurnJourney(_ShopperJourney):
    """Login -> Browse -> Add Items -> Change Quantity -> Remove Item -> Abandon."""

    @task
    def sign_in(self):
        self.login()

    @task
    def browse_products(self):
        self.browse()

    @task
    def add_items(self):
        self.added = []
        for product in self.products:
            payload = cart_item_data(product)
            with self.client.post(
                "/cart/add",
                json=payload,
                headers=self.headers,
                catch_response=True,
                name="POST /cart/add",
            ) as resp:
                if resp.status_code == 200:
                    self.added.append(payload)
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def change_quantity(self):
        if not self.added:
            self.interrupt()
            return
        line = self.added[0]
        body = {k: v for k, v in line.items() if k in ("selected_size", "selected_color")}
        body["quantity"] = line["quantity"] + 1
        with self.client.put(
            f"/cart/update/{line['product_id']}",
            json=body,
            headers=self.headers,
            catch_response=True,
            name="PUT /cart/update/{product_id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update quantity failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def remove_item(self):
        line = self.added[-1]
        body = {k: v for k, v in line.items() if k in ("selected_size", "selected_color")}
        with self.client.request(
            "DELETE",
            f"/cart/remove/{line['product_id']}",
            json=body,
            headers=self.headers,
            catch_response=True,
            name="DELETE /cart/remove/{product_id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Remove item failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def abandon(self):
        self.client.get("/cart", headers=self.headers, name="GET /cart")
        self.interrupt()


class ShopperUser(HttpUser):
    """Shoppers converting and abandoning carts at a 1:2 ratio."""

    wait_time = between(0.5, 2.0)
    tasks = {BrowseToCheckoutJourney: 1, CartChurnJourney: 2}
