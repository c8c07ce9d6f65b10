"""Movie API endpoints."""

from typing import Any, TypeVar

from fastapi import APIRouter, Depends, Path, Query
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from nextflix_api.schemas.movie import Genre, MovieDetail, MovieSearchResult
from nextflix_api.schemas.params import (
    GetMovieByIdParams,
    GetMoviesParams,
    GetPopularMoviesParams,
    GetTrendingMoviesParams,
    SearchMoviesParams,
    SortBy,
    TimeWindow,
)
from nextflix_api.services.movies import MovieService, get_movie_service
from nextflix_api.services.rate_limit import enforce_rate_limit

router = APIRouter(
    prefix="/movies",
    tags=["movies"],
    dependencies=[Depends(enforce_rate_limit)],
    responses={
        400: {"description": "Invalid parameters"},
        429: {"description": "Too many requests"},
    },
)

ParamsT = TypeVar("ParamsT", bound=BaseModel)


def build_params(model: type[ParamsT], **values: Any) -> ParamsT:
    """Build a parameter model, reporting failures as request validation errors."""
    try:
        return model(**values)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False)) from e


@router.get("/search", response_model=MovieSearchResult)
async def search_movies(
    query: str = Query(
        ..., min_length=1, description="Search query string", examples=["The Matrix"]
    ),
    page: int = Query(1, ge=1, description="Page number"),
    movie_service: MovieService = Depends(get_movie_service),
) -> MovieSearchResult:
    """Search movies by title."""
    params = build_params(SearchMoviesParams, query=query, page=page)
    return await movie_service.search_movies(params)


@router.get("/popular", response_model=MovieSearchResult)
async def get_popular_movies(
    page: int = Query(1, ge=1, description="Page number"),
    movie_service: MovieService = Depends(get_movie_service),
) -> MovieSearchResult:
    """Get popular movies."""
    return await movie_service.get_popular_movies(build_params(GetPopularMoviesParams, page=page))


@router.get("/genres", response_model=list[Genre])
async def get_genres(
    movie_service: MovieService = Depends(get_movie_service),
) -> list[Genre]:
    """Get the list of movie genres.

    Genre ids are specific to the configured provider.
    """
    return await movie_service.get_genres()


@router.get("/trending", response_model=MovieSearchResult)
async def get_trending_movies(
    page: int = Query(1, ge=1, description="Page number"),
    time_window: TimeWindow = Query(
        TimeWindow.DAY, alias="timeWindow", description="Time window for trending"
    ),
    movie_service: MovieService = Depends(get_movie_service),
) -> MovieSearchResult:
    """Get trending movies for the last day or week."""
    params = build_params(GetTrendingMoviesParams, page=page, time_window=time_window)
    return await movie_service.get_trending_movies(params)


@router.get("", response_model=MovieSearchResult)
async def get_movies(
    page: int = Query(1, ge=1, description="Page number"),
    sort_by: SortBy | None = Query(None, alias="sortBy", description="Sort order"),
    with_genres: str | None = Query(
        None, alias="withGenres", description="Comma-separated genre IDs", examples=["28,12"]
    ),
    year: int | None = Query(None, ge=1900, description="Release year"),
    vote_average_gte: float | None = Query(
        None, alias="voteAverageGte", ge=0, description="Minimum vote average"
    ),
    movie_service: MovieService = Depends(get_movie_service),
) -> MovieSearchResult:
    """Discover movies with filters and sorting."""
    params = build_params(
        GetMoviesParams,
        page=page,
        sort_by=sort_by,
        with_genres=with_genres,
        year=year,
        vote_average_gte=vote_average_gte,
    )
    return await movie_service.get_movies(params)


@router.get(
    "/{movie_id}",
    response_model=MovieDetail,
    responses={404: {"description": "Movie not found"}},
)
async def get_movie_by_id(
    movie_id: str = Path(
        ...,
        description="Movie ID (numeric for TMDB, IMDb ID such as tt3896198 for OMDB)",
        examples=["603"],
    ),
    movie_service: MovieService = Depends(get_movie_service),
) -> MovieDetail:
    """Get movie details by ID."""
    return await movie_service.get_movie_by_id(build_params(GetMovieByIdParams, id=movie_id))
