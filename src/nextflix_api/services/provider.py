"""Provider-independent interface for upstream movie databases."""

from abc import ABC, abstractmethod

from nextflix_api.config import Settings
from nextflix_api.schemas.movie import Genre, MovieDetail, MovieSearchResult
from nextflix_api.schemas.params import (
    GetMovieByIdParams,
    GetMoviesParams,
    GetPopularMoviesParams,
    GetTrendingMoviesParams,
    SearchMoviesParams,
)


class MovieProvider(ABC):
    """Movie lookups every upstream implementation must support.

    Implementations return normalized entities and raise ``APIError``
    subclasses for every failure.
    """

    name: str

    @abstractmethod
    async def search_movies(self, params: SearchMoviesParams) -> MovieSearchResult:
        """Search movies by title."""

    @abstractmethod
    async def get_movie_by_id(self, params: GetMovieByIdParams) -> MovieDetail:
        """Fetch one movie's details."""

    @abstractmethod
    async def get_popular_movies(self, params: GetPopularMoviesParams) -> MovieSearchResult:
        """List popular movies."""

    @abstractmethod
    async def get_genres(self) -> list[Genre]:
        """List the provider's movie genres."""

    @abstractmethod
    async def get_trending_movies(self, params: GetTrendingMoviesParams) -> MovieSearchResult:
        """List trending movies for a time window."""

    @abstractmethod
    async def get_movies(self, params: GetMoviesParams) -> MovieSearchResult:
        """Discover movies by filters and sort order."""

    @abstractmethod
    async def close(self) -> None:
        """Release network resources."""


def create_movie_provider(settings: Settings) -> MovieProvider:
    """Build the provider selected by ``MOVIE_PROVIDER``."""
    # Deferred: the client modules import this one.
    from nextflix_api.services.omdb import OMDBClient
    from nextflix_api.services.tmdb import TMDBClient

    if settings.movie_provider == "omdb":
        return OMDBClient(
            api_key=settings.omdb_api_key,
            base_url=settings.omdb_base_url,
            timeout=settings.request_timeout,
            seed_query=settings.omdb_seed_query,
        )
    return TMDBClient(
        api_key=settings.tmdb_api_key,
        base_url=settings.tmdb_base_url,
        timeout=settings.request_timeout,
    )
