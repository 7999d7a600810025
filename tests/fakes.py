import asyncio

from streamify.models import MoviePage


class FakeCatalog:
    """In-memory stand-in for TMDBClient that records every call."""

    def __init__(self, popular=None, genres=None, results=None, errors=None, delays=None):
        self.popular = popular or []
        self.genres = genres or []
        self.results = results or {}
        self.errors = errors or {}
        self.delays = delays or {}
        self.calls = []
        self.closed = False

    async def _answer(self, kind, argument=None):
        self.calls.append((kind, argument))
        delay = self.delays.get(argument, self.delays.get(kind, 0))
        if delay:
            await asyncio.sleep(delay)
        if kind in self.errors:
            raise self.errors[kind]

    async def fetch_popular_movies(self, page=1):
        await self._answer("popular")
        return MoviePage(results=self.popular)

    async def search_movies(self, query, page=1):
        await self._answer("search", query)
        return MoviePage(results=self.results.get(query, []))

    async def fetch_movies_by_genre(self, genre_id, page=1):
        await self._answer("by_genre", genre_id)
        return MoviePage(results=self.results.get(genre_id, []))

    async def fetch_genres(self):
        await self._answer("genres")
        return self.genres

    async def aclose(self):
        self.closed = True
