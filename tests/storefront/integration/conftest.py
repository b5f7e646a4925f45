import pytest
from fastapi.testclient import TestClient

from storefront.api.application import create_app
from storefront.auth.fake_adapter import FakeIdentityVerifier


@pytest.fixture()
def verifier():
    return FakeIdentityVerifier()


@pytest.fixture()
def client(verifier):
    return TestClient(create_app(verifier=verifier))


def _login(client, verifier, subject_id, email, name=None):
    token = verifier.register(subject_id, email=email, name=name)
    response = client.post("/auth/login", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {token}"}, response.json()["customer"]


@pytest.fixture()
def login(client, verifier):
    """Log a new identity in and return (auth headers, customer payload)."""

    def _do(subject_id="firebase-uid-001", email="asha@example.com", name="Asha Sen"):
        return _login(client, verifier, subject_id, email, name)

    return _do


@pytest.fixture()
def auth(login):
    headers, _ = login()
    return headers


@pytest.fixture()
def admin_auth(client, login):
    from protean.utils.globals import current_domain

    from storefront.customer.roles import ChangeCustomerRole

    headers, customer = login("firebase-uid-admin", "admin@example.com", "Store Admin")
    current_domain.process(ChangeCustomerRole(customer_id=customer["id"], role="admin"), asynchronous=False)
    return headers


@pytest.fixture()
def product(client, admin_auth):
    response = client.post(
        "/admin/products",
        json={
            "name": "Linen Shirt",
            "price": 1499.0,
            "stock_quantity": 5,
            "sizes": ["S", "M", "L"],
            "colors": [{"name": "Red", "hex_code": "#FF0000"}],
        },
        headers=admin_auth,
    )
    assert response.status_code == 201
    return response.json()


ADDRESS = {
    "street": "12 Park Street",
    "city": "Kolkata",
    "state": "West Bengal",
    "zip_code": "700016",
    "country": "India",
}


@pytest.fixture()
def address_id(client, auth):
    response = client.post("/user/addresses", json=ADDRESS, headers=auth)
    assert response.status_code == 201
    return response.json()["addresses"][0]["id"]
