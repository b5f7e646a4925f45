"""Integration tests for authentication and login sync."""


class TestBearerToken:
    def test_missing_header(self, client):
        response = client.get("/user/profile")
        assert response.status_code == 401
        assert response.json() == {"error": "No token provided"}

    def test_wrong_scheme(self, client):
        response = client.get("/user/profile", headers={"Authorization": "Basic abc"})
        assert response.status_code == 401

    def test_unknown_token(self, client):
        response = client.get("/cart", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid or expired token"}

    def test_revoked_token(self, client, verifier):
        token = verifier.register("firebase-uid-001", email="asha@example.com")
        verifier.revoke(token)
        response = client.post("/auth/login", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401


class TestLogin:
    def test_login_creates_customer(self, login):
        _, customer = login()
        assert customer["external_id"] == "firebase-uid-001"
        assert customer["email"] == "asha@example.com"
        assert customer["first_name"] == "Asha"
        assert customer["last_name"] == "Sen"
        assert customer["role"] == "customer"

    def test_login_is_idempotent(self, login):
        _, first = login()
        _, second = login()
        assert first["id"] == second["id"]

    def test_verified_but_never_logged_in(self, client, verifier):
        token = verifier.register("firebase-uid-009", email="new@example.com")
        response = client.get("/user/profile", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 404

    def test_identity_without_email(self, client, verifier):
        token = verifier.register("phone-only-uid")
        response = client.post("/auth/login", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 400

    def test_returning_identity_with_taken_email(self, client, verifier, login):
        login()
        login("firebase-uid-002", "ravi@example.com", "Ravi Das")

        token = verifier.register("firebase-uid-002", email="asha@example.com")
        response = client.post("/auth/login", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 409


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
