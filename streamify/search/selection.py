"""
Decides which catalog call a query needs and filters its results.
"""

from typing import Iterable, NamedTuple, Optional, Union

from streamify.models import Movie, QueryState

SEARCH = "search"
BY_GENRE = "by_genre"
POPULAR = "popular"


class Operation(NamedTuple):
    kind: str
    argument: Union[str, int, None] = None


def select_operation(query: QueryState) -> Operation:
    # search text wins over genre, genre wins over the popular list
    if query.search_text.strip():
        return Operation(SEARCH, query.search_text)
    if query.genre_id is not None:
        return Operation(BY_GENRE, query.genre_id)
    return Operation(POPULAR)


def filter_by_rating(movies: Iterable[Movie], min_rating: Optional[int]) -> list[Movie]:
    if min_rating is None:
        return list(movies)
    return [movie for movie in movies if movie.vote_average >= min_rating]
