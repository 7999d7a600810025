"""
Async client for the TMDB catalog API and poster URL helpers.
"""

from typing import Optional, TypeVar

import httpx
from pydantic import BaseModel

from streamify.config import DEFAULT_BASE_URL, IMAGE_BASE_URL, PLACEHOLDER_IMAGE_URL
from streamify.logger import logger
from streamify.models import Genre, GenreList, MoviePage
from streamify.utils import timed

POPULAR_ERROR = "Failed to fetch movies. Please try again later."
SEARCH_ERROR = "Failed to search movies. Please try again later."
GENRES_ERROR = "Failed to fetch genres. Please try again later."
BY_GENRE_ERROR = "Failed to fetch movies by genre. Please try again later."

ModelT = TypeVar("ModelT", bound=BaseModel)


class CatalogError(Exception):
    """A catalog request failed. The message is safe to show to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def _describe(exc: Exception) -> str:
    # httpx error strings carry the full URL, api_key included
    if isinstance(exc, httpx.HTTPStatusError):
        return f"status {exc.response.status_code}"
    return type(exc).__name__


class TMDBClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def _get(self, path: str, params: dict, model: type[ModelT], error: str) -> ModelT:
        try:
            response = await self._client.get(
                f"{self.base_url}{path}", params={"api_key": self.api_key, **params}
            )
            response.raise_for_status()
            return model.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as exc:
            # ValueError covers both invalid JSON and pydantic validation errors
            logger.error(f"GET {path} failed: {_describe(exc)}")
            raise CatalogError(error) from exc

    @timed
    async def fetch_popular_movies(self, page: int = 1) -> MoviePage:
        return await self._get("/movie/popular", {"page": page}, MoviePage, POPULAR_ERROR)

    @timed
    async def search_movies(self, query: str, page: int = 1) -> MoviePage:
        return await self._get(
            "/search/movie", {"query": query, "page": page}, MoviePage, SEARCH_ERROR
        )

    @timed
    async def fetch_movies_by_genre(self, genre_id: int, page: int = 1) -> MoviePage:
        return await self._get(
            "/discover/movie", {"with_genres": genre_id, "page": page}, MoviePage, BY_GENRE_ERROR
        )

    @timed
    async def fetch_genres(self) -> list[Genre]:
        genre_list = await self._get("/genre/movie/list", {}, GenreList, GENRES_ERROR)
        return genre_list.genres

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def get_image_url(poster_path: Optional[str]) -> str:
    if not poster_path:
        return PLACEHOLDER_IMAGE_URL
    return f"{IMAGE_BASE_URL}{poster_path}"


def format_rating(vote_average: float) -> str:
    return f"{vote_average:.1f}"
