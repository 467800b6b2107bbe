"""Tests for API middleware."""

import pytest
from fastapi.testclient import TestClient

from app.main import app


@pytest.fixture
def client() -> TestClient:
    """Create test client."""
    return TestClient(app)


class TestRequestIdMiddleware:
    """Tests for request ID correlation middleware."""

    def test_generates_request_id_if_not_provided(self, client: TestClient) -> None:
        """Should generate request ID if not in request headers."""
        response = client.get("/health")
        assert response.status_code == 200
        assert "X-Request-ID" in response.headers
        # UUID format
        request_id = response.headers["X-Request-ID"]
        assert len(request_id) == 36

    def test_uses_provided_request_id(self, client: TestClient) -> None:
        """Should use request ID from request headers."""
        custom_id = "custom-request-id-12345"
        response = client.get(
            "/health",
            headers={"X-Request-ID": custom_id},
        )
        assert response.status_code == 200
        assert response.headers["X-Request-ID"] == custom_id

    def test_error_responses_carry_request_id(self, client: TestClient) -> None:
        """Routing errors are tagged too."""
        response = client.get("/no-such-route", headers={"X-Request-ID": "abc"})
        assert response.status_code == 404
        assert response.headers["X-Request-ID"] == "abc"


class TestErrorBodies:
    """Tests for the shared error body format."""

    def test_unknown_route_uses_status_message_body(self, client: TestClient) -> None:
        """Routing 404s use the same {status, message} body as handlers."""
        response = client.get("/no-such-route")
        assert response.status_code == 404
        data = response.json()
        assert data["status"] == 404
        assert "message" in data
