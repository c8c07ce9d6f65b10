"""Normalization of provider payloads into the internal movie schema.

TMDB payloads map field-for-field. OMDB payloads are flat and string-typed,
so most of the work here is deriving structured values from free text:
numeric ids from IMDb identifiers, runtimes from "136 min", revenue from
"$463,517,383" and genre/country/language lists from comma-joined strings.

Every function is total: missing optional fields fall back to defaults.
"""

import math
import re
from datetime import datetime

from nextflix_api.schemas.external import (
    OMDBMovieDetails,
    OMDBSearchItem,
    OMDBSearchResponse,
    TMDBGenre,
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

OMDB_PAGE_SIZE = 10
OMDB_STATUS = "Released"

_RUNTIME_RE = re.compile(r"^\s*(\d+)")
_NON_DIGIT_RE = re.compile(r"\D")
_YEAR_RE = re.compile(r"\d{4}")


# TMDB
def tmdb_to_movie(data: TMDBMovieResult) -> Movie:
    """Map a TMDB list result to a Movie."""
    return Movie(**_tmdb_movie_fields(data))


def tmdb_to_movie_detail(data: TMDBMovieDetails) -> MovieDetail:
    """Map TMDB movie details to a MovieDetail."""
    return MovieDetail(
        **_tmdb_movie_fields(data),
        genres=tmdb_to_genres(data.genres or []),
        runtime=data.runtime,
        budget=data.budget or 0,
        revenue=data.revenue or 0,
        homepage=data.homepage or None,
        imdb_id=data.imdb_id or None,
        production_companies=[
            ProductionCompany(
                id=company.id,
                name=company.name,
                logo_path=company.logo_path,
                origin_country=company.origin_country or "",
            )
            for company in data.production_companies or []
        ],
        production_countries=[
            ProductionCountry(iso_3166_1=country.iso_3166_1, name=country.name)
            for country in data.production_countries or []
        ],
        spoken_languages=[
            SpokenLanguage(iso_639_1=language.iso_639_1, name=language.name)
            for language in data.spoken_languages or []
        ],
        status=data.status or "",
        tagline=data.tagline or None,
    )


def tmdb_to_search_result(data: TMDBSearchResponse) -> MovieSearchResult:
    """Map a paginated TMDB response to a MovieSearchResult."""
    return MovieSearchResult(
        page=max(data.page, 1),
        results=[tmdb_to_movie(movie) for movie in data.results or []],
        total_pages=data.total_pages,
        total_results=data.total_results,
    )


def tmdb_to_genres(genres: list[TMDBGenre]) -> list[Genre]:
    """Map TMDB genres to Genre entities."""
    return [Genre(id=genre.id, name=genre.name) for genre in genres]


def _tmdb_movie_fields(data: TMDBMovieResult) -> dict:
    return {
        "id": data.id,
        "title": data.title or "",
        "overview": data.overview or "",
        "release_date": data.release_date,
        "poster_path": data.poster_path,
        "backdrop_path": data.backdrop_path,
        "vote_average": data.vote_average or 0.0,
        "vote_count": data.vote_count or 0,
        "popularity": data.popularity or 0.0,
        "original_language": data.original_language or "",
        "original_title": data.original_title or "",
        "genre_ids": data.genre_ids or [],
        "adult": bool(data.adult),
        "video": bool(data.video),
    }


# OMDB field parsers
def parse_imdb_id(imdb_id: str | None) -> int:
    """Derive a numeric id from an IMDb identifier.

    The two-character prefix is dropped and the remainder parsed as an
    integer: "tt3896198" -> 3896198. Returns 0 when there is no numeric
    remainder.
    """
    if not imdb_id:
        return 0
    remainder = imdb_id.strip()[2:]
    return int(remainder) if remainder.isascii() and remainder.isdigit() else 0


def parse_runtime(runtime: str | None) -> int | None:
    """Extract minutes from a runtime string such as "136 min"."""
    if not runtime:
        return None
    match = _RUNTIME_RE.match(runtime)
    return int(match.group(1)) if match else None


def parse_revenue(box_office: str | None) -> int:
    """Parse a currency string such as "$463,517,383" into an integer."""
    if not box_office:
        return 0
    digits = _NON_DIGIT_RE.sub("", box_office)
    return int(digits) if digits else 0


def parse_vote_count(votes: str | None) -> int:
    """Parse a thousands-separated count such as "1,234,567"."""
    if not votes:
        return 0
    digits = votes.replace(",", "").strip()
    return int(digits) if digits.isascii() and digits.isdigit() else 0


def parse_vote_average(imdb_rating: str | None, metascore: str | None) -> float:
    """Pick the IMDb rating, else the 0-100 Metascore scaled to 0-10."""
    rating = _parse_float(imdb_rating)
    if rating is not None:
        return rating
    score = _parse_float(metascore)
    if score is not None:
        return score / 10
    return 0.0


def parse_release_date(released: str | None, year: str | None = None) -> str | None:
    """Convert "31 Mar 1999" to ISO format, falling back to the year."""
    if released:
        try:
            return datetime.strptime(released.strip(), "%d %b %Y").date().isoformat()
        except ValueError:
            pass
    if year:
        match = _YEAR_RE.search(year)
        if match:
            return match.group(0)
    return None


def split_list(value: str | None) -> list[str]:
    """Split a comma-joined string, trimming whitespace and dropping blanks."""
    if not value:
        return []
    return [token.strip() for token in value.split(",") if token.strip()]


def _parse_float(value: str | None) -> float | None:
    if not value:
        return None
    try:
        result = float(value.replace(",", ""))
    except ValueError:
        return None
    return result if math.isfinite(result) else None


# OMDB
def omdb_to_genres(genre: str | None) -> list[Genre]:
    """Build genres from a comma-joined string with 1-based positional ids."""
    return [Genre(id=index, name=name) for index, name in enumerate(split_list(genre), start=1)]


def omdb_search_item_to_movie(item: OMDBSearchItem) -> Movie:
    """Map an OMDB search entry to a Movie.

    Search entries carry no ratings, plot or genres, so those fields keep
    their defaults.
    """
    return Movie(
        id=parse_imdb_id(item.imdb_id),
        title=item.title or "",
        release_date=parse_release_date(None, item.year),
        poster_path=item.poster,
        original_title=item.title or "",
    )


def omdb_to_movie_detail(data: OMDBMovieDetails) -> MovieDetail:
    """Map OMDB movie details to a MovieDetail."""
    vote_average = parse_vote_average(data.imdb_rating, data.metascore)
    vote_count = parse_vote_count(data.imdb_votes)
    genres = omdb_to_genres(data.genre)

    return MovieDetail(
        id=parse_imdb_id(data.imdb_id),
        title=data.title or "",
        overview=data.plot or "",
        release_date=parse_release_date(data.released, data.year),
        poster_path=data.poster,
        backdrop_path=None,
        vote_average=vote_average,
        vote_count=vote_count,
        popularity=vote_average * vote_count,
        original_language="",
        original_title=data.title or "",
        genre_ids=[genre.id for genre in genres],
        adult=False,
        video=False,
        genres=genres,
        runtime=parse_runtime(data.runtime),
        budget=0,
        revenue=parse_revenue(data.box_office),
        homepage=data.website,
        imdb_id=data.imdb_id,
        production_companies=[
            ProductionCompany(id=index, name=name)
            for index, name in enumerate(split_list(data.production), start=1)
        ],
        production_countries=[
            ProductionCountry(iso_3166_1="", name=name) for name in split_list(data.country)
        ],
        spoken_languages=[
            SpokenLanguage(iso_639_1="", name=name) for name in split_list(data.language)
        ],
        status=OMDB_STATUS,
        tagline=None,
    )


def omdb_to_search_result(data: OMDBSearchResponse, page: int) -> MovieSearchResult:
    """Map an OMDB search response to a MovieSearchResult."""
    total_results = parse_vote_count(data.total_results)
    return MovieSearchResult(
        page=max(page, 1),
        results=[omdb_search_item_to_movie(item) for item in data.search or []],
        total_pages=math.ceil(total_results / OMDB_PAGE_SIZE),
        total_results=total_results,
    )
