"""Pytest fixtures and configuration."""

import os
from collections.abc import AsyncGenerator, Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

# Set test environment variables before importing the app
os.environ.setdefault("TMDB_API_KEY", "test-tmdb-api-key")
os.environ.setdefault("MOVIE_PROVIDER", "tmdb")

from nextflix_api.main import app
from nextflix_api.services.cache import ResponseCache
from nextflix_api.services.movies import MovieService, get_movie_service
from nextflix_api.services.provider import MovieProvider


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend for tests."""
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_rate_limiter() -> None:
    """Give every test a fresh request budget."""
    app.state.rate_limiter.reset()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def mock_provider() -> MagicMock:
    """A movie provider whose operations are async mocks."""
    provider = MagicMock(spec=MovieProvider)
    provider.name = "mock"
    provider.search_movies = AsyncMock()
    provider.get_movie_by_id = AsyncMock()
    provider.get_popular_movies = AsyncMock()
    provider.get_genres = AsyncMock()
    provider.get_trending_movies = AsyncMock()
    provider.get_movies = AsyncMock()
    provider.close = AsyncMock()
    return provider


@pytest.fixture
def movie_service(mock_provider: MagicMock) -> Generator[MovieService]:
    """Install a movie service backed by the mock provider and a fresh cache."""
    service = MovieService(provider=mock_provider, cache=ResponseCache(ttl=300, max_entries=100))
    app.dependency_overrides[get_movie_service] = lambda: service
    try:
        yield service
    finally:
        app.dependency_overrides.clear()
