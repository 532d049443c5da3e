"""
Dashboard API tests
"""
from fastapi.testclient import TestClient


class TestDashboard:
    """/dashboard"""

    def test_admin_stats(self, client: TestClient, admin_headers, customer_user, room_a,
                         make_reservation):
        make_reservation(customer_user, [room_a])
        response = client.get("/dashboard/admin", headers=admin_headers)
        assert response.status_code == 200
        assert response.json() == {
            "total_rooms": 1,
            "total_reservations": 1,
            "total_users": 2,
            "pending_reservations": 1,
        }

    def test_admin_stats_forbidden(self, client: TestClient, customer_headers):
        assert client.get("/dashboard/admin", headers=customer_headers).status_code == 403

    def test_customer_summary(self, client: TestClient, customer_headers, customer_user, room_a,
                              make_reservation):
        make_reservation(customer_user, [room_a])
        data = client.get("/dashboard/me", headers=customer_headers).json()
        assert data["total_reservations"] == 1
        assert data["by_status"]["pending"] == 1
        assert data["upcoming"] == 1


class TestHealth:

    def test_health(self, client: TestClient):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
