"""
Authentication API tests
"""
from fastapi.testclient import TestClient
from sqlalchemy import text


class TestSignUp:
    """POST /auth/sign-up"""

    def test_sign_up(self, client: TestClient):
        response = client.post("/auth/sign-up", json={
            "email": "maria@example.com", "password": "secret123", "name": "Maria"
        })
        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "maria@example.com"
        assert data["name"] == "Maria"

    def test_duplicate_email(self, client: TestClient, customer_user):
        response = client.post("/auth/sign-up", json={
            "email": "ana@example.com", "password": "secret123"
        })
        assert response.status_code == 400

    def test_short_password(self, client: TestClient):
        response = client.post("/auth/sign-up", json={"email": "x@example.com", "password": "123"})
        assert response.status_code == 422

    def test_invalid_email(self, client: TestClient):
        response = client.post("/auth/sign-up", json={"email": "not-an-email", "password": "secret123"})
        assert response.status_code == 422


class TestSignIn:
    """POST /auth/sign-in"""

    def test_sign_in(self, client: TestClient, customer_user):
        response = client.post("/auth/sign-in", json={
            "email": "ana@example.com", "password": "secret123"
        })
        assert response.status_code == 200
        data = response.json()
        assert data["access_token"]
        assert data["token_type"] == "bearer"
        assert data["role"] == "customer"
        assert data["user_id"] == customer_user.id

    def test_wrong_password(self, client: TestClient, customer_user):
        response = client.post("/auth/sign-in", json={
            "email": "ana@example.com", "password": "wrong-pass"
        })
        assert response.status_code == 401


class TestSession:
    """Session endpoints"""

    def test_me(self, client: TestClient, admin_headers):
        response = client.get("/auth/me", headers=admin_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "admin@example.com"
        assert data["role"] == "admin"

    def test_unknown_stored_role_acts_as_customer(self, client: TestClient, db_session,
                                                   customer_headers, customer_user):
        db_session.execute(
            text("UPDATE user_roles SET role = 'superuser' WHERE user_id = :uid"),
            {"uid": customer_user.id},
        )
        db_session.commit()
        response = client.get("/auth/me", headers=customer_headers)
        assert response.status_code == 200
        assert response.json()["role"] == "customer"
        assert client.get("/users", headers=customer_headers).status_code == 403

    def test_session(self, client: TestClient, customer_headers, customer_user):
        response = client.get("/auth/session", headers=customer_headers)
        assert response.status_code == 200
        assert response.json()["user_id"] == customer_user.id

    def test_no_token(self, client: TestClient):
        response = client.get("/auth/me")
        assert response.status_code in (401, 403)

    def test_sign_out_invalidates_token(self, client: TestClient, customer_headers):
        response = client.post("/auth/sign-out", headers=customer_headers)
        assert response.status_code == 200
        response = client.get("/auth/me", headers=customer_headers)
        assert response.status_code == 401
