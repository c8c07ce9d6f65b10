"""Pydantic schemas for the internal movie entity model.

These are the provider-independent shapes returned by every movie endpoint.
Instances are frozen: they are built once per normalization pass and may be
shared between requests through the response cache.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EntityModel(BaseModel):
    """Base for immutable entities serialized with camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Genre(EntityModel):
    """A movie genre. Ids are provider-specific."""

    id: int = Field(description="Genre ID")
    name: str = Field(description="Genre name")


class ProductionCompany(EntityModel):
    """A company credited with producing a movie."""

    id: int = Field(description="Company ID")
    name: str = Field(description="Company name")
    logo_path: str | None = Field(default=None, description="Logo image path")
    origin_country: str = Field(default="", description="ISO 3166-1 country code")


class ProductionCountry(EntityModel):
    """A country a movie was produced in."""

    iso_3166_1: str = Field(default="", alias="iso31661", description="ISO 3166-1 code")
    name: str = Field(description="Country name")


class SpokenLanguage(EntityModel):
    """A language spoken in a movie."""

    iso_639_1: str = Field(default="", alias="iso6391", description="ISO 639-1 code")
    name: str = Field(description="Language name")


class Movie(EntityModel):
    """A movie as returned in list and search results."""

    id: int = Field(description="Provider movie ID")
    title: str = Field(default="", description="Movie title")
    overview: str = Field(default="", description="Movie overview/synopsis")
    release_date: str | None = Field(default=None, description="Release date (ISO 8601)")
    poster_path: str | None = Field(default=None, description="Poster image path or URL")
    backdrop_path: str | None = Field(default=None, description="Backdrop image path or URL")
    vote_average: float = Field(default=0.0, description="Average vote score (0-10)")
    vote_count: int = Field(default=0, ge=0, description="Number of votes")
    popularity: float = Field(default=0.0, description="Popularity score")
    original_language: str = Field(default="", description="ISO 639-1 original language")
    original_title: str = Field(default="", description="Original title")
    genre_ids: tuple[int, ...] = Field(default=(), description="Genre IDs")
    adult: bool = Field(default=False, description="Adult content flag")
    video: bool = Field(default=False, description="Video release flag")


class MovieDetail(Movie):
    """Detailed movie information."""

    genres: tuple[Genre, ...] = Field(default=(), description="Genres")
    runtime: int | None = Field(default=None, description="Runtime in minutes")
    budget: int = Field(default=0, ge=0, description="Production budget")
    revenue: int = Field(default=0, ge=0, description="Box office revenue")
    homepage: str | None = Field(default=None, description="Official homepage URL")
    imdb_id: str | None = Field(default=None, description="IMDb ID")
    production_companies: tuple[ProductionCompany, ...] = Field(
        default=(), description="Production companies"
    )
    production_countries: tuple[ProductionCountry, ...] = Field(
        default=(), description="Production countries"
    )
    spoken_languages: tuple[SpokenLanguage, ...] = Field(
        default=(), description="Spoken languages"
    )
    status: str = Field(default="", description="Release status")
    tagline: str | None = Field(default=None, description="Movie tagline")


class MovieSearchResult(EntityModel):
    """A single page of a paginated movie list."""

    page: int = Field(ge=1, description="Current page number")
    results: tuple[Movie, ...] = Field(default=(), description="Movies on this page")
    total_pages: int = Field(default=0, ge=0, description="Total number of pages")
    total_results: int = Field(default=0, ge=0, description="Total number of results")
