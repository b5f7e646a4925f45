"""Catalogue administration load test scenario.

Seeds and maintains the product listing the shopper journeys buy from.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import product_data
from loadtests.helpers.auth import admin_token, bearer
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import CatalogueState


class CatalogueMaintenanceJourney(SequentialTaskSet):
    """Login -> Create Products -> Restock -> Reprice -> List All."""

    def on_start(self):
        self.state = CatalogueState(token=admin_token())

    @property
    def headers(self):
        return bearer(self.state.token)

    @task
    def sign_in(self):
        with self.client.post(
            "/auth/login",
            headers=self.headers,
            catch_response=True,
            name="POST /auth/login (admin)",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Admin login failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()
            elif resp.json()["customer"]["role"] != "admin":
                resp.failure("Load test admin has not been promoted; run manage.py make-admin")
                self.interrupt()

    @task
    def create_products(self):
        for _ in range(3):
            with self.client.post(
                "/admin/products",
                json=product_data(),
                headers=self.headers,
                catch_response=True,
                name="POST /admin/products",
            ) as resp:
                if resp.status_code == 201:
                    self.state.product_ids.append(resp.json()["id"])
                else:
                    resp.failure(f"Create product failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def restock(self):
        for product_id in self.state.product_ids:
            with self.client.put(
                f"/admin/products/{product_id}",
                json={"stock_quantity": random.randint(500, 5000)},
                headers=self.headers,
                catch_response=True,
                name="PUT /admin/products/{id}",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Restock failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def reprice(self):
        if not self.state.product_ids:
            return
        product_id = random.choice(self.state.product_ids)
        with self.client.put(
            f"/admin/products/{product_id}",
            json={"price": round(random.uniform(5.0, 250.0), 2)},
            headers=self.headers,
            catch_response=True,
            name="PUT /admin/products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Reprice failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def list_all(self):
        self.client.get("/admin/products", headers=self.headers, name="GET /admin/products")
        self.interrupt()


class CatalogueAdminUser(HttpUser):
    """A small number of administrators keeping the shelves stocked."""

    wait_time = between(2.0, 5.0)
    fixed_count = 1
    tasks = [CatalogueMaintenanceJourney]
