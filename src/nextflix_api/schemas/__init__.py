"""Pydantic schemas for request/response validation."""

from nextflix_api.schemas.errors import ErrorResponse, HealthResponse
from nextflix_api.schemas.external import (
    OMDBMovieDetails,
    OMDBSearchItem,
    OMDBSearchResponse,
    TMDBGenre,
    TMDBGenreListResponse,
    TMDBMovieDetails,
    TMDBMovieResult,
    TMDBSearchResponse,
)
from nextflix_api.schemas.movie import (
    Genre,
    Movie,
    MovieDetail,
    MovieSearchResult,
    ProductionCompany,
    ProductionCountry,
    SpokenLanguage,
)
from nextflix_api.schemas.params import (
    GetMovieByIdParams,
    GetMoviesParams,
    GetPopularMoviesParams,
    GetTrendingMoviesParams,
    SearchMoviesParams,
    SortBy,
    TimeWindow,
)

__all__ = [
    # External API schemas
    "TMDBGenre",
    "TMDBGenreListResponse",
    "TMDBMovieResult",
    "TMDBMovieDetails",
    "TMDBSearchResponse",
    "OMDBSearchItem",
    "OMDBSearchResponse",
    "OMDBMovieDetails",
    # Movie schemas
    "Genre",
    "Movie",
    "MovieDetail",
    "MovieSearchResult",
    "ProductionCompany",
    "ProductionCountry",
    "SpokenLanguage",
    # Request parameters
    "SearchMoviesParams",
    "GetMovieByIdParams",
    "GetPopularMoviesParams",
    "GetTrendingMoviesParams",
    "GetMoviesParams",
    "SortBy",
    "TimeWindow",
    # Responses
    "ErrorResponse",
    "HealthResponse",
]
