"""
Data models and types.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

ALL = "all"


class Genre(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str


class Movie(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    poster_path: Optional[str] = None
    vote_average: float = 0.0
    release_date: Optional[date] = None
    overview: str = ""
    genre_ids: tuple[int, ...] = ()

    @field_validator("release_date", mode="before")
    @classmethod
    def _empty_date_is_missing(cls, value):
        # TMDB sends "" for movies without a known release date
        if value == "":
            return None
        return value

    @field_validator("overview", mode="before")
    @classmethod
    def _null_overview(cls, value):
        return value or ""


class MoviePage(BaseModel):
    results: list[Movie]
    page: int = 1
    total_pages: int = 0
    total_results: int = 0


class GenreList(BaseModel):
    genres: list[Genre]


def _parse_selection(value: str, kind: str) -> str:
    value = str(value).strip()
    if value == ALL:
        return value
    try:
        int(value)
    except ValueError:
        raise ValueError(f"invalid {kind} selection: {value!r}") from None
    return value


@dataclass(frozen=True)
class QueryState:
    search_text: str = ""
    genre: str = ALL
    rating: str = ALL

    def __post_init__(self):
        object.__setattr__(self, "genre", _parse_selection(self.genre, "genre"))
        object.__setattr__(self, "rating", _parse_selection(self.rating, "rating"))

    @property
    def genre_id(self) -> Optional[int]:
        return None if self.genre == ALL else int(self.genre)

    @property
    def min_rating(self) -> Optional[int]:
        return None if self.rating == ALL else int(self.rating)

    @property
    def is_default(self) -> bool:
        return not self.search_text and self.genre == ALL and self.rating == ALL


@dataclass
class ViewState:
    movies: list[Movie] = field(default_factory=list)
    genres: list[Genre] = field(default_factory=list)
    loading: bool = True
    error: Optional[str] = None
    query: QueryState = field(default_factory=QueryState)
