"""Tests for health check endpoint."""

from httpx import AsyncClient

from nextflix_api import __version__


async def test_health_check(client: AsyncClient) -> None:
    """Test that health check endpoint returns ok status."""
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == __version__
    assert data["timestamp"].endswith("Z")


async def test_health_check_sets_request_id(client: AsyncClient) -> None:
    """Test that every response carries a generated request id."""
    response = await client.get("/health")
    assert response.headers["X-Request-ID"]


async def test_health_check_echoes_request_id(client: AsyncClient) -> None:
    """Test that a caller-supplied request id is echoed back."""
    response = await client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


async def test_security_headers(client: AsyncClient) -> None:
    """Test that hardening headers are applied."""
    response = await client.get("/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "SAMEORIGIN"


async def test_openapi_served_under_prefix(client: AsyncClient) -> None:
    """Test that the OpenAPI document is served under the API prefix."""
    response = await client.get("/api/swagger.json")
    assert response.status_code == 200
    assert "/api/movies/search" in response.json()["paths"]


async def test_unknown_route_uses_error_envelope(client: AsyncClient) -> None:
    """Test that unknown routes return the standard error body."""
    response = await client.get("/api/nothing-here")
    assert response.status_code == 404
    data = response.json()
    assert data["statusCode"] == 404
    assert data["errorCode"] == "HTTP_404"
    assert data["path"] == "/api/nothing-here"


async def test_health_check_under_api_prefix(client: AsyncClient) -> None:
    """Test that the health check is also served under the API prefix."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


async def test_error_path_includes_query_string(client: AsyncClient) -> None:
    """Test that the error body reports the full request target."""
    response = await client.get("/api/nothing-here", params={"page": "2"})
    assert response.status_code == 404
    assert response.json()["path"] == "/api/nothing-here?page=2"
