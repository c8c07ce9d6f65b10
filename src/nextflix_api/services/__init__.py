"""Business logic and external API clients."""

from nextflix_api.services.base import (
    APIError,
    BaseAPIClient,
    InvalidParameterError,
    NotFoundError,
    RateLimitError,
    UpstreamUnavailableError,
)
from nextflix_api.services.cache import ResponseCache, make_cache_key
from nextflix_api.services.movies import MovieService, get_movie_service
from nextflix_api.services.omdb import OMDBClient
from nextflix_api.services.provider import MovieProvider, create_movie_provider
from nextflix_api.services.tmdb import TMDBClient

__all__ = [
    "APIError",
    "BaseAPIClient",
    "InvalidParameterError",
    "NotFoundError",
    "RateLimitError",
    "UpstreamUnavailableError",
    "ResponseCache",
    "make_cache_key",
    "MovieProvider",
    "create_movie_provider",
    "MovieService",
    "get_movie_service",
    "TMDBClient",
    "OMDBClient",
]
