"""Tests for provider payload normalization."""

import pytest

from nextflix_api.schemas.external import (
    OMDBMovieDetails,
    OMDBSearchResponse,
    TMDBMovieDetails,
    TMDBSearchResponse,
)
from nextflix_api.services.normalizers import (
    omdb_to_genres,
    omdb_to_movie_detail,
    omdb_to_search_result,
    parse_imdb_id,
    parse_release_date,
    parse_revenue,
    parse_runtime,
    parse_vote_average,
    parse_vote_count,
    split_list,
    tmdb_to_movie_detail,
    tmdb_to_search_result,
)


class TestOMDBFieldParsers:
    """Tests for the string parsers used on OMDB payloads."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("tt3896198", 3896198), ("tt0133093", 133093), ("abc", 0), ("", 0), (None, 0)],
    )
    def test_parse_imdb_id(self, value: str | None, expected: int) -> None:
        assert parse_imdb_id(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("136 min", 136), ("90", 90), ("", None), (None, None), ("unknown", None)],
    )
    def test_parse_runtime(self, value: str | None, expected: int | None) -> None:
        assert parse_runtime(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("$463,517,383", 463517383), ("$0", 0), ("", 0), (None, 0), ("unknown", 0)],
    )
    def test_parse_revenue(self, value: str | None, expected: int) -> None:
        assert parse_revenue(value) == expected

    def test_parse_vote_count(self) -> None:
        assert parse_vote_count("1,234,567") == 1234567
        assert parse_vote_count(None) == 0
        assert parse_vote_count("many") == 0

    def test_parse_vote_average_prefers_imdb_rating(self) -> None:
        assert parse_vote_average("8.7", "73") == 8.7

    def test_parse_vote_average_falls_back_to_metascore(self) -> None:
        assert parse_vote_average(None, "73") == pytest.approx(7.3)

    def test_parse_vote_average_missing(self) -> None:
        assert parse_vote_average(None, None) == 0.0
        assert parse_vote_average("n/a", "") == 0.0

    def test_parse_release_date(self) -> None:
        assert parse_release_date("31 Mar 1999", "1999") == "1999-03-31"
        assert parse_release_date(None, "1999") == "1999"
        assert parse_release_date("sometime", "2001–2003") == "2001"
        assert parse_release_date(None, None) is None

    def test_split_list(self) -> None:
        assert split_list("Action, Sci-Fi ,, Drama") == ["Action", "Sci-Fi", "Drama"]
        assert split_list(None) == []


class TestOMDBMapping:
    """Tests for mapping OMDB payloads to movie entities."""

    def test_genres_get_positional_ids(self) -> None:
        genres = omdb_to_genres("Action, Sci-Fi")
        assert [(genre.id, genre.name) for genre in genres] == [(1, "Action"), (2, "Sci-Fi")]

    def test_movie_detail(self) -> None:
        data = OMDBMovieDetails.model_validate(
            {
                "Title": "The Matrix",
                "Year": "1999",
                "Released": "31 Mar 1999",
                "Runtime": "136 min",
                "Genre": "Action, Sci-Fi",
                "Plot": "A computer hacker learns about the true nature of reality.",
                "Language": "English",
                "Country": "United States, Australia",
                "Poster": "https://m.media-amazon.com/images/matrix.jpg",
                "Metascore": "73",
                "imdbRating": "8.7",
                "imdbVotes": "2,000,000",
                "imdbID": "tt0133093",
                "BoxOffice": "$172,076,928",
                "Production": "Warner Bros., Village Roadshow",
                "Website": "N/A",
                "Response": "True",
            }
        )

        movie = omdb_to_movie_detail(data)

        assert movie.id == 133093
        assert movie.title == "The Matrix"
        assert movie.original_title == "The Matrix"
        assert movie.release_date == "1999-03-31"
        assert movie.runtime == 136
        assert movie.revenue == 172076928
        assert movie.budget == 0
        assert movie.vote_average == 8.7
        assert movie.vote_count == 2000000
        assert movie.popularity == pytest.approx(8.7 * 2000000)
        assert movie.genre_ids == (1, 2)
        assert movie.status == "Released"
        assert movie.homepage is None
        assert movie.backdrop_path is None
        assert [company.name for company in movie.production_companies] == [
            "Warner Bros.",
            "Village Roadshow",
        ]
        assert movie.production_companies[1].id == 2
        assert [country.name for country in movie.production_countries] == [
            "United States",
            "Australia",
        ]
        assert movie.production_countries[0].iso_3166_1 == ""
        assert movie.spoken_languages[0].name == "English"

    def test_movie_detail_all_fields_missing(self) -> None:
        """Test mapping never fails on a sparse payload."""
        data = OMDBMovieDetails.model_validate(
            {
                "Title": "Obscure",
                "Runtime": "N/A",
                "Genre": "N/A",
                "imdbRating": "N/A",
                "imdbVotes": "N/A",
                "BoxOffice": "N/A",
            }
        )

        movie = omdb_to_movie_detail(data)

        assert movie.id == 0
        assert movie.runtime is None
        assert movie.revenue == 0
        assert movie.vote_average == 0.0
        assert movie.vote_count == 0
        assert movie.popularity == 0.0
        assert movie.genres == ()
        assert movie.release_date is None
        assert movie.overview == ""

    def test_search_result_pages(self) -> None:
        data = OMDBSearchResponse.model_validate(
            {
                "Search": [
                    {"Title": "Guardians of the Galaxy Vol. 2", "Year": "2017",
                     "imdbID": "tt3896198", "Type": "movie", "Poster": "N/A"},
                ],
                "totalResults": "21",
                "Response": "True",
            }
        )

        result = omdb_to_search_result(data, page=3)

        assert result.page == 3
        assert result.total_results == 21
        assert result.total_pages == 3
        assert result.results[0].id == 3896198
        assert result.results[0].poster_path is None

    def test_search_result_empty(self) -> None:
        result = omdb_to_search_result(OMDBSearchResponse.model_validate({}), page=1)
        assert result.results == ()
        assert result.total_pages == 0


class TestTMDBMapping:
    """Tests for mapping TMDB payloads to movie entities."""

    def test_search_result_page_floor(self) -> None:
        result = tmdb_to_search_result(TMDBSearchResponse.model_validate({"page": 0}))
        assert result.page == 1
        assert result.results == ()

    def test_movie_detail_defaults(self) -> None:
        movie = tmdb_to_movie_detail(TMDBMovieDetails.model_validate({"id": 603}))

        assert movie.id == 603
        assert movie.title == ""
        assert movie.budget == 0
        assert movie.genres == ()
        assert movie.status == ""
        assert movie.tagline is None
