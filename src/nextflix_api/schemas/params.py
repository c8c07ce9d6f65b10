"""Typed parameter models passed from the request handlers to the service layer."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class SortBy(str, Enum):
    """Sort orders accepted by the discover endpoint."""

    POPULARITY_ASC = "popularity.asc"
    POPULARITY_DESC = "popularity.desc"
    RELEASE_DATE_ASC = "release_date.asc"
    RELEASE_DATE_DESC = "release_date.desc"
    VOTE_AVERAGE_ASC = "vote_average.asc"
    VOTE_AVERAGE_DESC = "vote_average.desc"
    VOTE_COUNT_ASC = "vote_count.asc"
    VOTE_COUNT_DESC = "vote_count.desc"


class TimeWindow(str, Enum):
    """Trending time windows."""

    DAY = "day"
    WEEK = "week"


class ParamsModel(BaseModel):
    """Query parameters are camelCase on the wire and snake_case in code."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )


class SearchMoviesParams(ParamsModel):
    """Parameters for a title search."""

    query: str = Field(min_length=1, description="Search query")
    page: int = Field(default=1, ge=1, description="Page number")


class GetMovieByIdParams(ParamsModel):
    """Parameters for a detail lookup.

    The id stays a string: numeric for TMDB, an IMDb id for OMDB.
    """

    id: str = Field(min_length=1, description="Provider movie ID")


class GetPopularMoviesParams(ParamsModel):
    """Parameters for the popular movies list."""

    page: int = Field(default=1, ge=1, description="Page number")


class GetTrendingMoviesParams(ParamsModel):
    """Parameters for the trending movies list."""

    page: int = Field(default=1, ge=1, description="Page number")
    time_window: TimeWindow = Field(default=TimeWindow.DAY, description="Trending window")


class GetMoviesParams(ParamsModel):
    """Parameters for filtered discovery."""

    page: int = Field(default=1, ge=1, description="Page number")
    sort_by: SortBy | None = Field(default=None, description="Sort order")
    with_genres: str | None = Field(default=None, description="Comma-separated genre IDs")
    year: int | None = Field(default=None, ge=1900, description="Release year")
    vote_average_gte: float | None = Field(default=None, ge=0, description="Minimum rating")

    @field_validator("with_genres")
    @classmethod
    def validate_genre_ids(cls, v: str | None) -> str | None:
        """Require comma-separated integer ids and normalize spacing."""
        if v is None:
            return None
        tokens = [token.strip() for token in v.split(",") if token.strip()]
        if not tokens:
            return None
        if not all(token.isascii() and token.isdigit() for token in tokens):
            raise ValueError("withGenres must be a comma-separated list of integer genre IDs")
        return ",".join(tokens)
