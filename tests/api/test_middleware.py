"""Tests for API middleware."""

from fastapi.testclient import TestClient

from flowershop.infrastructure.config import settings


class TestRequestIdMiddleware:
    """Tests for request ID correlation middleware."""

    def test_generates_request_id_if_not_provided(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert len(response.headers["X-Request-ID"]) == 36

    def test_uses_provided_request_id(self, client: TestClient) -> None:
        response = client.get("/health", headers={"X-Request-ID": "bouquet-req-42"})

        assert response.headers["X-Request-ID"] == "bouquet-req-42"

    def test_request_id_in_error_envelope(self, admin_client: TestClient) -> None:
        """Should echo the request ID inside error bodies."""
        response = admin_client.post(
            "/products",
            json={"shape": "vase", "name": "Vase"},
            headers={"X-Request-ID": "req-vase"},
        )

        assert response.status_code == 400
        assert response.json()["request_id"] == "req-vase"
        assert response.headers["X-Request-ID"] == "req-vase"


class TestApiKeyMiddleware:
    """Tests for API key authentication middleware."""

    def test_public_endpoints_dont_require_auth(self, client: TestClient) -> None:
        assert client.get("/health").status_code == 200
        assert client.get("/ready").status_code == 200

    def test_protected_endpoints_require_auth(self, client: TestClient) -> None:
        response = client.post(
            "/products",
            json={"shape": "flower", "name": "Rose"},
            headers={"X-Admin-ID": "admin-a"},
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHORIZED"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_invalid_auth_format_rejected(self, client: TestClient) -> None:
        response = client.post(
            "/products",
            json={"shape": "flower", "name": "Rose"},
            headers={"Authorization": "InvalidFormat", "X-Admin-ID": "admin-a"},
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHORIZED"

    def test_invalid_api_key_rejected(self, client: TestClient) -> None:
        response = client.post(
            "/products",
            json={"shape": "flower", "name": "Rose"},
            headers={"Authorization": "Bearer invalid-key", "X-Admin-ID": "admin-a"},
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "INVALID_API_KEY"

    def test_valid_api_key_accepted(self, client: TestClient, admin) -> None:
        response = client.post(
            "/products",
            json={"shape": "flower", "name": "Rose"},
            headers={
                "Authorization": f"Bearer {settings.flowershop_api_key}",
                "X-Admin-ID": str(admin.id),
            },
        )

        assert response.status_code == 201
