"""Tests for API middleware."""

import pytest
from fastapi.testclient import TestClient

from product_catalog.domain.exceptions import DomainError
from product_catalog.main import app
from product_catalog.products import ProductsService


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

    def test_error_body_carries_request_id(self, client: TestClient) -> None:
        """Domain error responses should echo the request ID."""
        response = client.get(
            "/products/missing-product",
            headers={"X-Request-ID": "trace-me"},
        )
        assert response.status_code == 404
        assert response.json()["request_id"] == "trace-me"
        assert response.headers["X-Request-ID"] == "trace-me"


class TestErrorHandlerMiddleware:
    """Tests for the catch-all error handler."""

    def test_unexpected_error_is_hidden(
        self,
        client: TestClient,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Unhandled exceptions should become a generic 500 without details."""

        async def explode(self, pagination=None):
            raise RuntimeError("secret driver detail")

        monkeypatch.setattr(ProductsService, "find_all", explode)

        response = client.get("/products")

        assert response.status_code == 500
        data = response.json()
        assert data["error_code"] == "INTERNAL_ERROR"
        assert "secret" not in data["message"]
        assert data["details"] == []


class TestErrorEnvelope:
    """Tests for the shared error body on framework errors."""

    def test_unknown_route(self, client: TestClient) -> None:
        """Routing 404s should use the error body, not FastAPI's default."""
        response = client.get("/nope/deeper", headers={"X-Request-ID": "lost"})

        assert response.status_code == 404
        assert response.json() == {
            "error_code": "NOT_FOUND",
            "message": "Not Found",
            "details": [],
            "request_id": "lost",
        }

    def test_method_not_allowed(self, client: TestClient) -> None:
        """405s should use the error body and keep the Allow header."""
        response = client.put("/products", json={})

        assert response.status_code == 405
        data = response.json()
        assert data["error_code"] == "METHOD_NOT_ALLOWED"
        assert data["details"] == []
        assert "allow" in response.headers

    def test_every_domain_error_is_mapped(self) -> None:
        """Each concrete domain error should have its own handler."""
        for error_type in DomainError.__subclasses__():
            assert error_type in app.exception_handlers
        assert DomainError not in app.exception_handlers
        assert Exception not in app.exception_handlers
