"""
User administration API tests
"""
from fastapi.testclient import TestClient


class TestUsers:
    """/users"""

    def test_list_users(self, client: TestClient, admin_headers, customer_user):
        response = client.get("/users", headers=admin_headers)
        assert response.status_code == 200
        roles = {u["email"]: u["role"] for u in response.json()}
        assert roles == {"admin@example.com": "admin", "ana@example.com": "customer"}

    def test_customer_cannot_list(self, client: TestClient, customer_headers):
        assert client.get("/users", headers=customer_headers).status_code == 403

    def test_get_role(self, client: TestClient, customer_headers, admin_user):
        response = client.get(f"/users/{admin_user.id}/role", headers=customer_headers)
        assert response.json() == {"user_id": admin_user.id, "role": "admin"}

    def test_unknown_user_role_defaults(self, client: TestClient, customer_headers):
        response = client.get("/users/nobody/role", headers=customer_headers)
        assert response.json()["role"] == "customer"

    def test_promote(self, client: TestClient, admin_headers, customer_headers, customer_user):
        response = client.put(f"/users/{customer_user.id}/role", json={"role": "admin"},
                              headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["role"] == "admin"
        assert client.get("/auth/me", headers=customer_headers).json()["role"] == "admin"

    def test_customer_cannot_promote(self, client: TestClient, customer_headers, customer_user):
        response = client.put(f"/users/{customer_user.id}/role", json={"role": "admin"},
                              headers=customer_headers)
        assert response.status_code == 403

    def test_invalid_role(self, client: TestClient, admin_headers, customer_user):
        response = client.put(f"/users/{customer_user.id}/role", json={"role": "owner"},
                              headers=admin_headers)
        assert response.status_code == 422
