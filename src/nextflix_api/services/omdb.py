"""OMDB (Open Movie Database) API client service."""

from datetime import date
from typing import Any

import httpx

from nextflix_api.config import get_settings
from nextflix_api.schemas.external import OMDBMovieDetails, OMDBSearchResponse
from nextflix_api.schemas.movie import Genre, MovieDetail, MovieSearchResult
from nextflix_api.schemas.params import (
    GetMovieByIdParams,
    GetMoviesParams,
    GetPopularMoviesParams,
    GetTrendingMoviesParams,
    SearchMoviesParams,
    SortBy,
)
from nextflix_api.services.base import (
    APIError,
    BaseAPIClient,
    InvalidParameterError,
    NotFoundError,
)
from nextflix_api.services.normalizers import (
    omdb_to_genres,
    omdb_to_movie_detail,
    omdb_to_search_result,
)
from nextflix_api.services.provider import MovieProvider

# IMDb's fixed genre vocabulary; OMDB has no genre endpoint.
IMDB_GENRES = (
    "Action",
    "Adult",
    "Adventure",
    "Animation",
    "Biography",
    "Comedy",
    "Crime",
    "Documentary",
    "Drama",
    "Family",
    "Fantasy",
    "Film-Noir",
    "Game-Show",
    "History",
    "Horror",
    "Music",
    "Musical",
    "Mystery",
    "News",
    "Reality-TV",
    "Romance",
    "Sci-Fi",
    "Short",
    "Sport",
    "Talk-Show",
    "Thriller",
    "War",
    "Western",
)

_NOT_FOUND_ERRORS = ("not found", "incorrect imdb id")


class OMDBClient(BaseAPIClient, MovieProvider):
    """Client for the OMDB API.

    OMDB exposes a single endpoint driven by query parameters and reports
    logical failures as ``{"Response": "False", "Error": "..."}`` with HTTP
    200. It has no popular, trending, discover or genre endpoints; those
    operations are served from searches for a seed title.
    """

    name = "omdb"
    error_code = "OMDB_API_ERROR"

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        seed_query: str | None = None,
    ) -> None:
        """Initialize the OMDB client.

        Args:
            api_key: OMDB API key. If not provided, uses settings.
            base_url: OMDB base URL. If not provided, uses settings.
            timeout: Request timeout in seconds. If not provided, uses settings.
            seed_query: Title searched to build listing pages.
        """
        settings = get_settings()
        self._api_key = api_key or settings.omdb_api_key
        base = base_url or settings.omdb_base_url
        self.seed_query = seed_query or settings.omdb_seed_query

        if not self._api_key:
            raise ValueError("OMDB API key is required")

        super().__init__(base_url=base, timeout=timeout or settings.request_timeout)

    @property
    def default_headers(self) -> dict[str, str]:
        """Return default headers for API requests."""
        return {"Accept": "application/json"}

    @property
    def default_params(self) -> dict[str, Any]:
        """OMDB authenticates with an ``apikey`` query parameter."""
        return {"apikey": self._api_key}

    def _error_message(self, response: httpx.Response) -> str | None:
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            return body.get("Error")
        return None

    async def _query(self, params: dict[str, Any], not_found_message: str) -> dict[str, Any]:
        """Call the OMDB endpoint and turn logical failures into exceptions."""
        try:
            data = await self.get("/", params=params)
        except NotFoundError as e:
            raise NotFoundError(not_found_message, error_code="MOVIE_NOT_FOUND") from e

        if str(data.get("Response", "True")).lower() == "false":
            error = data.get("Error") or "Unknown OMDB error"
            lowered = error.lower()
            if any(marker in lowered for marker in _NOT_FOUND_ERRORS):
                raise NotFoundError(not_found_message, error_code="MOVIE_NOT_FOUND")
            if "too many results" in lowered:
                raise InvalidParameterError("Search query is too broad, please refine it")
            raise APIError(f"API error: {error}", status_code=502, error_code=self.error_code)
        return data

    async def _search(
        self, query: str, page: int, year: int | None = None
    ) -> MovieSearchResult:
        params: dict[str, Any] = {"s": query, "page": page, "type": "movie"}
        if year is not None:
            params["y"] = year
        data = await self._query(params, f'No movies found matching "{query}"')
        return omdb_to_search_result(self._parse(OMDBSearchResponse, data), page)

    async def search_movies(self, params: SearchMoviesParams) -> MovieSearchResult:
        """Search for movies by title.

        Raises:
            NotFoundError: If OMDB reports no matches.
        """
        return await self._search(params.query, params.page)

    async def get_movie_by_id(self, params: GetMovieByIdParams) -> MovieDetail:
        """Get detailed information about a movie by IMDb id.

        Raises:
            InvalidParameterError: If the id is not an IMDb id or number.
            NotFoundError: If the movie is not found.
        """
        imdb_id = self.parse_movie_id(params.id)
        data = await self._query(
            {"i": imdb_id, "plot": "full"},
            f"Movie with ID {params.id} not found",
        )
        return omdb_to_movie_detail(self._parse(OMDBMovieDetails, data))

    async def get_popular_movies(self, params: GetPopularMoviesParams) -> MovieSearchResult:
        """List movies matching the seed title."""
        return await self._search(self.seed_query, params.page)

    async def get_genres(self) -> list[Genre]:
        """Return the IMDb genre vocabulary with positional ids."""
        return omdb_to_genres(",".join(IMDB_GENRES))

    async def get_trending_movies(self, params: GetTrendingMoviesParams) -> MovieSearchResult:
        """List seed-title movies released this year.

        OMDB has no notion of trending, so both time windows return the
        same page.
        """
        return await self._search(self.seed_query, params.page, year=date.today().year)

    async def get_movies(self, params: GetMoviesParams) -> MovieSearchResult:
        """Discover seed-title movies, optionally for one release year.

        Release-date sort orders are applied to the returned page. Other sort
        keys, genre and rating filters need data that search results do not
        carry and are ignored.
        """
        result = await self._search(self.seed_query, params.page, year=params.year)
        if params.sort_by in (SortBy.RELEASE_DATE_ASC, SortBy.RELEASE_DATE_DESC):
            ordered = sorted(
                result.results,
                key=lambda movie: movie.release_date or "",
                reverse=params.sort_by is SortBy.RELEASE_DATE_DESC,
            )
            result = result.model_copy(update={"results": tuple(ordered)})
        return result

    @staticmethod
    def parse_movie_id(raw_id: str) -> str:
        """Normalize an id to IMDb form.

        Accepts "tt0133093" as-is and turns a bare number into the
        zero-padded IMDb id ("133093" -> "tt0133093").
        """
        value = raw_id.strip().lower()
        digits = value[2:] if value.startswith("tt") else value
        if not (digits.isascii() and digits.isdigit()) or int(digits) < 1:
            raise InvalidParameterError(
                f"Movie ID must be an IMDb ID (tt1234567) or a positive integer, got {raw_id!r}"
            )
        if value.startswith("tt"):
            return value
        return f"tt{int(digits):07d}"
