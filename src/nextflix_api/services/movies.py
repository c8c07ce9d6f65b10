"""Movie service: the configured provider behind the response cache."""

import logging

from fastapi import Request

from nextflix_api.schemas.movie import Genre, MovieDetail, MovieSearchResult
from nextflix_api.schemas.params import (
    GetMovieByIdParams,
    GetMoviesParams,
    GetPopularMoviesParams,
    GetTrendingMoviesParams,
    SearchMoviesParams,
)
from nextflix_api.services.cache import ResponseCache, make_cache_key
from nextflix_api.services.provider import MovieProvider

logger = logging.getLogger(__name__)


class MovieService:
    """Serves movie lookups from the cache, falling back to the provider.

    Each operation derives its cache key from the operation name and every
    parameter, so distinct requests never share an entry.
    """

    def __init__(self, provider: MovieProvider, cache: ResponseCache) -> None:
        self.provider = provider
        self.cache = cache

    async def search_movies(self, params: SearchMoviesParams) -> MovieSearchResult:
        """Search movies by title."""
        key = make_cache_key("search", **params.model_dump(mode="json"))
        return await self.cache.get_or_compute(key, lambda: self.provider.search_movies(params))

    async def get_movie_by_id(self, params: GetMovieByIdParams) -> MovieDetail:
        """Get one movie's details by provider id."""
        key = make_cache_key("detail", **params.model_dump(mode="json"))
        return await self.cache.get_or_compute(key, lambda: self.provider.get_movie_by_id(params))

    async def get_popular_movies(self, params: GetPopularMoviesParams) -> MovieSearchResult:
        """Get a page of popular movies."""
        key = make_cache_key("popular", **params.model_dump(mode="json"))
        return await self.cache.get_or_compute(
            key, lambda: self.provider.get_popular_movies(params)
        )

    async def get_genres(self) -> list[Genre]:
        """Get the provider's genre list."""
        return await self.cache.get_or_compute(
            make_cache_key("genres"), self.provider.get_genres
        )

    async def get_trending_movies(self, params: GetTrendingMoviesParams) -> MovieSearchResult:
        """Get a page of trending movies for the requested time window."""
        key = make_cache_key("trending", **params.model_dump(mode="json"))
        return await self.cache.get_or_compute(
            key, lambda: self.provider.get_trending_movies(params)
        )

    async def get_movies(self, params: GetMoviesParams) -> MovieSearchResult:
        """Discover movies matching the given filters and sort order."""
        key = make_cache_key("discover", **params.model_dump(mode="json"))
        return await self.cache.get_or_compute(key, lambda: self.provider.get_movies(params))

    async def close(self) -> None:
        """Close the provider's HTTP client."""
        await self.provider.close()
        logger.info("Closed %s provider", self.provider.name)


def get_movie_service(request: Request) -> MovieService:
    """FastAPI dependency returning the application's movie service."""
    return request.app.state.movie_service
