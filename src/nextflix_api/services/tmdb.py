"""TMDB (The Movie Database) API client service."""

from typing import Any

import httpx

from nextflix_api.config import get_settings
from nextflix_api.schemas.external import (
    TMDBGenreListResponse,
    TMDBMovieDetails,
    TMDBSearchResponse,
)
from nextflix_api.schemas.movie import Genre, MovieDetail, MovieSearchResult
from nextflix_api.schemas.params import (
    GetMovieByIdParams,
    GetMoviesParams,
    GetPopularMoviesParams,
    GetTrendingMoviesParams,
    SearchMoviesParams,
)
from nextflix_api.services.base import BaseAPIClient, InvalidParameterError, NotFoundError
from nextflix_api.services.normalizers import (
    tmdb_to_genres,
    tmdb_to_movie_detail,
    tmdb_to_search_result,
)
from nextflix_api.services.provider import MovieProvider


class TMDBClient(BaseAPIClient, MovieProvider):
    """Client for The Movie Database (TMDB) API.

    Provides methods to search, list and fetch movie details.
    Uses Bearer token authentication.
    """

    name = "tmdb"
    error_code = "TMDB_API_ERROR"

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the TMDB client.

        Args:
            api_key: TMDB API key. If not provided, uses settings.
            base_url: TMDB base URL. If not provided, uses settings.
            timeout: Request timeout in seconds. If not provided, uses settings.
        """
        settings = get_settings()
        self._api_key = api_key or settings.tmdb_api_key
        base = base_url or settings.tmdb_base_url

        if not self._api_key:
            raise ValueError("TMDB API key is required")

        super().__init__(base_url=base, timeout=timeout or settings.request_timeout)

    @property
    def default_headers(self) -> dict[str, str]:
        """Return default headers including Bearer token authentication."""
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
        }

    def _error_message(self, response: httpx.Response) -> str | None:
        """TMDB reports failures as ``{"status_code": ..., "status_message": ...}``."""
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            return body.get("status_message")
        return None

    async def search_movies(self, params: SearchMoviesParams) -> MovieSearchResult:
        """Search for movies by title.

        Args:
            params: Search query and page number (1-based).

        Returns:
            One page of matching movies.
        """
        data = await self.get("/search/movie", params={"query": params.query, "page": params.page})
        return tmdb_to_search_result(self._parse(TMDBSearchResponse, data))

    async def get_movie_by_id(self, params: GetMovieByIdParams) -> MovieDetail:
        """Get detailed information about a specific movie.

        Args:
            params: Numeric TMDB movie ID.

        Returns:
            Detailed movie information.

        Raises:
            InvalidParameterError: If the id is not a positive integer.
            NotFoundError: If the movie is not found.
        """
        movie_id = self.parse_movie_id(params.id)
        try:
            data = await self.get(f"/movie/{movie_id}")
        except NotFoundError as e:
            raise NotFoundError(
                f"Movie with ID {movie_id} not found", error_code="MOVIE_NOT_FOUND"
            ) from e
        return tmdb_to_movie_detail(self._parse(TMDBMovieDetails, data))

    async def get_popular_movies(self, params: GetPopularMoviesParams) -> MovieSearchResult:
        """Get the current popular movies list."""
        data = await self.get("/movie/popular", params={"page": params.page})
        return tmdb_to_search_result(self._parse(TMDBSearchResponse, data))

    async def get_genres(self) -> list[Genre]:
        """Get the official movie genre list."""
        data = await self.get("/genre/movie/list")
        return tmdb_to_genres(self._parse(TMDBGenreListResponse, data).genres or [])

    async def get_trending_movies(self, params: GetTrendingMoviesParams) -> MovieSearchResult:
        """Get trending movies for the given time window."""
        data = await self.get(
            f"/trending/movie/{params.time_window.value}", params={"page": params.page}
        )
        return tmdb_to_search_result(self._parse(TMDBSearchResponse, data))

    async def get_movies(self, params: GetMoviesParams) -> MovieSearchResult:
        """Discover movies using filters and sort order.

        Only filters that were supplied are forwarded upstream.
        """
        request_params: dict[str, Any] = {"page": params.page}
        if params.sort_by is not None:
            request_params["sort_by"] = params.sort_by.value
        if params.with_genres:
            request_params["with_genres"] = params.with_genres
        if params.year is not None:
            request_params["year"] = params.year
        if params.vote_average_gte is not None:
            request_params["vote_average.gte"] = params.vote_average_gte

        data = await self.get("/discover/movie", params=request_params)
        return tmdb_to_search_result(self._parse(TMDBSearchResponse, data))

    @staticmethod
    def parse_movie_id(raw_id: str) -> int:
        """Validate a TMDB movie id, which must be a positive integer."""
        value = raw_id.strip()
        if not (value.isascii() and value.isdigit()) or int(value) < 1:
            raise InvalidParameterError(f"Movie ID must be a positive integer, got {raw_id!r}")
        return int(value)
