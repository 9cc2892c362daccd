"""
Tests for health check endpoints.
"""

from fastapi import FastAPI, Response
from fastapi.testclient import TestClient

from rest_api.core.middlewares import SecurityHeadersMiddleware
from shared.infrastructure.events import redis_pool


class FailingRedis:
    async def ping(self):
        raise ConnectionError("connection refused")

    async def close(self):
        pass


class TestHealthEndpoints:
    """Test health check API endpoints."""

    def test_health_check(self, client):
        """Basic health check should return healthy status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "rest-api"

    def test_health_check_needs_no_token(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200

    def test_detailed_health_all_dependencies_up(self, client):
        response = client.get("/api/health/detailed")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["dependencies"]["database"]["status"] == "healthy"
        assert data["dependencies"]["redis"]["status"] == "healthy"
        assert data["event_publisher"]["state"] == "closed"

    def test_detailed_health_reports_redis_down(self, client, monkeypatch):
        """An unreachable Redis degrades the service and returns 503."""
        monkeypatch.setattr(redis_pool, "_redis_pool", FailingRedis())

        response = client.get("/api/health/detailed")
        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "degraded"
        assert data["dependencies"]["redis"]["status"] == "unhealthy"
        assert "connection refused" in data["dependencies"]["redis"]["error"]

    def test_responses_carry_request_id(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"

    def test_security_headers(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Content-Security-Policy"].startswith("default-src 'none'")

    def test_security_headers_on_api_routes(self, client, auth_headers, seed_location):
        response = client.get(f"/api/locations/{seed_location.id}/bookings", headers=auth_headers)
        assert response.status_code == 200
        assert response.headers["X-Content-Type-Options"] == "nosniff"

    def test_server_header_is_stripped(self):
        app = FastAPI()
        app.add_middleware(SecurityHeadersMiddleware)

        @app.get("/ping")
        def ping():
            return Response("pong", headers={"Server": "uvicorn"})

        response = TestClient(app).get("/ping")
        assert response.status_code == 200
        assert "server" not in response.headers
        assert response.headers["X-Frame-Options"] == "DENY"
