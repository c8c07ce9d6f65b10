"""Pydantic schemas for external API responses (TMDB, OMDB)."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# TMDB Schemas
class TMDBGenre(BaseModel):
    """A genre from TMDB."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(description="TMDB genre ID")
    name: str = Field(default="", description="Genre name")


class TMDBProductionCompany(BaseModel):
    """A production company from TMDB movie details."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(description="TMDB company ID")
    name: str = Field(default="", description="Company name")
    logo_path: str | None = Field(default=None, description="Logo image path")
    origin_country: str | None = Field(default=None, description="Origin country code")


class TMDBProductionCountry(BaseModel):
    """A production country from TMDB movie details."""

    model_config = ConfigDict(extra="ignore")

    iso_3166_1: str = Field(default="", description="ISO 3166-1 code")
    name: str = Field(default="", description="Country name")


class TMDBSpokenLanguage(BaseModel):
    """A spoken language from TMDB movie details."""

    model_config = ConfigDict(extra="ignore")

    iso_639_1: str = Field(default="", description="ISO 639-1 code")
    name: str = Field(default="", description="Language name")
    english_name: str | None = Field(default=None, description="English language name")


class TMDBMovieResult(BaseModel):
    """A single movie result from a TMDB list endpoint."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(description="TMDB movie ID")
    title: str | None = Field(default=None, description="Movie title")
    original_title: str | None = Field(default=None, description="Original title")
    original_language: str | None = Field(default=None, description="Original language")
    release_date: str | None = Field(default=None, description="Release date")
    poster_path: str | None = Field(default=None, description="Poster image path")
    backdrop_path: str | None = Field(default=None, description="Backdrop image path")
    overview: str | None = Field(default=None, description="Movie overview/synopsis")
    vote_average: float | None = Field(default=None, description="Average vote score")
    vote_count: int | None = Field(default=None, description="Number of votes")
    popularity: float | None = Field(default=None, description="Popularity score")
    genre_ids: list[int] | None = Field(default=None, description="Genre IDs")
    adult: bool | None = Field(default=None, description="Adult content flag")
    video: bool | None = Field(default=None, description="Video release flag")

    @field_validator("release_date", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for date fields."""
        if v == "":
            return None
        return v


class TMDBSearchResponse(BaseModel):
    """Paginated response from TMDB search, popular, trending and discover."""

    model_config = ConfigDict(extra="ignore")

    page: int = Field(default=1, description="Current page number")
    total_pages: int = Field(default=0, description="Total number of pages")
    total_results: int = Field(default=0, description="Total number of results")
    results: list[TMDBMovieResult] | None = Field(default=None, description="Movie results")


class TMDBMovieDetails(TMDBMovieResult):
    """Detailed movie information from TMDB."""

    genres: list[TMDBGenre] | None = Field(default=None, description="Genres")
    runtime: int | None = Field(default=None, description="Runtime in minutes")
    status: str | None = Field(default=None, description="Release status")
    tagline: str | None = Field(default=None, description="Movie tagline")
    budget: int | None = Field(default=None, description="Production budget")
    revenue: int | None = Field(default=None, description="Box office revenue")
    imdb_id: str | None = Field(default=None, description="IMDB ID")
    homepage: str | None = Field(default=None, description="Official homepage URL")
    production_companies: list[TMDBProductionCompany] | None = Field(
        default=None, description="Production companies"
    )
    production_countries: list[TMDBProductionCountry] | None = Field(
        default=None, description="Production countries"
    )
    spoken_languages: list[TMDBSpokenLanguage] | None = Field(
        default=None, description="Spoken languages"
    )


class TMDBGenreListResponse(BaseModel):
    """Response from the TMDB movie genre list endpoint."""

    model_config = ConfigDict(extra="ignore")

    genres: list[TMDBGenre] | None = Field(default=None, description="Genres")


# OMDB Schemas
class OMDBModel(BaseModel):
    """Base for OMDB payloads.

    OMDB capitalizes field names and reports missing values as the string
    "N/A"; both are handled here so the normalizer only sees ``None``.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def na_to_none(cls, v: Any) -> Any:
        """Treat OMDB's "N/A" placeholder and blank strings as missing."""
        if isinstance(v, str) and v.strip() in ("", "N/A"):
            return None
        return v


class OMDBSearchItem(OMDBModel):
    """A single entry of an OMDB search response."""

    title: str | None = Field(default=None, alias="Title")
    year: str | None = Field(default=None, alias="Year")
    imdb_id: str | None = Field(default=None, alias="imdbID")
    type: str | None = Field(default=None, alias="Type")
    poster: str | None = Field(default=None, alias="Poster")


class OMDBSearchResponse(OMDBModel):
    """Response from OMDB search (``s=`` query)."""

    search: list[OMDBSearchItem] | None = Field(default=None, alias="Search")
    total_results: str | None = Field(default=None, alias="totalResults")
    response: str | None = Field(default=None, alias="Response")
    error: str | None = Field(default=None, alias="Error")


class OMDBRating(OMDBModel):
    """A third-party rating attached to OMDB movie details."""

    source: str | None = Field(default=None, alias="Source")
    value: str | None = Field(default=None, alias="Value")


class OMDBMovieDetails(OMDBModel):
    """Detailed movie information from OMDB (``i=`` lookup)."""

    title: str | None = Field(default=None, alias="Title")
    year: str | None = Field(default=None, alias="Year")
    rated: str | None = Field(default=None, alias="Rated")
    released: str | None = Field(default=None, alias="Released")
    runtime: str | None = Field(default=None, alias="Runtime")
    genre: str | None = Field(default=None, alias="Genre")
    director: str | None = Field(default=None, alias="Director")
    plot: str | None = Field(default=None, alias="Plot")
    language: str | None = Field(default=None, alias="Language")
    country: str | None = Field(default=None, alias="Country")
    poster: str | None = Field(default=None, alias="Poster")
    ratings: list[OMDBRating] | None = Field(default=None, alias="Ratings")
    metascore: str | None = Field(default=None, alias="Metascore")
    imdb_rating: str | None = Field(default=None, alias="imdbRating")
    imdb_votes: str | None = Field(default=None, alias="imdbVotes")
    imdb_id: str | None = Field(default=None, alias="imdbID")
    type: str | None = Field(default=None, alias="Type")
    box_office: str | None = Field(default=None, alias="BoxOffice")
    production: str | None = Field(default=None, alias="Production")
    website: str | None = Field(default=None, alias="Website")
    response: str | None = Field(default=None, alias="Response")
    error: str | None = Field(default=None, alias="Error")
