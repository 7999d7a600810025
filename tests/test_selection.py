import pytest

from streamify.models import Movie, QueryState
from streamify.search.selection import (BY_GENRE, POPULAR, SEARCH, Operation,
                                        filter_by_rating, select_operation)

MOVIES = [
    Movie(id=1, title="Arrival", vote_average=8.1),
    Movie(id=2, title="Jupiter Ascending", vote_average=6.5),
    Movie(id=3, title="Interstellar", vote_average=9.0),
    Movie(id=4, title="Gravity", vote_average=7.0),
]


@pytest.mark.parametrize("genre", ["all", "878"])
@pytest.mark.parametrize("rating", ["all", "7"])
def test_search_text_wins_over_filters(genre, rating):
    query = QueryState(search_text="dune", genre=genre, rating=rating)
    assert select_operation(query) == Operation(SEARCH, "dune")


def test_search_keeps_text_as_typed():
    query = QueryState(search_text=" dune ")
    assert select_operation(query) == Operation(SEARCH, " dune ")


def test_blank_search_text_falls_back_to_genre():
    query = QueryState(search_text="   ", genre="878")
    assert select_operation(query) == Operation(BY_GENRE, 878)


def test_no_text_no_genre_is_popular():
    assert select_operation(QueryState(rating="8")) == Operation(POPULAR)


def test_filter_keeps_ratings_at_or_above_threshold_in_order():
    result = filter_by_rating(MOVIES, 7)
    assert [movie.id for movie in result] == [1, 3, 4]


def test_filter_without_threshold_keeps_everything():
    assert filter_by_rating(MOVIES, None) == MOVIES


def test_filter_can_empty_the_list():
    assert filter_by_rating(MOVIES, 10) == []


def test_query_state_rejects_non_numeric_selection():
    with pytest.raises(ValueError):
        QueryState(rating="lots")
    with pytest.raises(ValueError):
        QueryState(genre="scifi")


def test_query_state_defaults():
    assert QueryState().is_default
    assert not QueryState(search_text=" ").is_default
    assert QueryState(genre="878").genre_id == 878
    assert QueryState(rating="6").min_rating == 6
