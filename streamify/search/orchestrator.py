"""
Coordinates the search text, genre and rating inputs of one browsing session.

The orchestrator owns a single `ViewState`. Input setters only mutate the
query and restart the debounce window; the catalog is queried once the query
has been stable for the whole window. Every fetch cycle gets a generation
number and results from an older cycle are dropped when a newer one started
after it.
"""

import asyncio
import dataclasses
from typing import Optional

from streamify.catalog.tmdb import CatalogError, TMDBClient
from streamify.logger import logger
from streamify.models import MoviePage, QueryState, ViewState
from streamify.search.debounce import Debouncer
from streamify.search.selection import (BY_GENRE, SEARCH, Operation,
                                        filter_by_rating, select_operation)

UNEXPECTED_ERROR = "An unexpected error occurred"


class QueryOrchestrator:
    def __init__(self, catalog: TMDBClient, debounce_seconds: float = 0.5):
        self.state = ViewState()
        self._catalog = catalog
        self._debouncer = Debouncer(debounce_seconds, self._on_settled)
        self._generation = 0
        self._in_flight = 0
        self._initialized = False
        self._starting = False
        self._evaluating = 0
        self._tasks: set[asyncio.Task] = set()
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def set_search_text(self, text: str) -> None:
        self._update_query(search_text=text)

    def set_genre(self, genre: str) -> None:
        self._update_query(genre=str(genre))

    def set_rating(self, rating: str) -> None:
        self._update_query(rating=str(rating))

    def _update_query(self, **changes) -> None:
        query = dataclasses.replace(self.state.query, **changes)
        if query == self.state.query:
            return
        self.state.query = query
        self._debouncer.schedule()
        self._update_idle()

    def start(self) -> None:
        """Schedule `initialize()` on the running loop without waiting for it."""
        if self._initialized or self._starting:
            return
        self._starting = True
        self._update_idle()
        task = asyncio.get_running_loop().create_task(self.initialize())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def initialize(self) -> None:
        if self._initialized:
            return
        self._initialized = True
        await self._load_initial()

    async def retry(self) -> None:
        """Start over from the popular list, like reloading the page."""
        self._debouncer.cancel()
        self.state.query = QueryState()
        self._initialized = True
        await self._load_initial()

    async def _load_initial(self) -> None:
        generation = self._begin()
        self._starting = False
        try:
            page, genres = await asyncio.gather(
                self._catalog.fetch_popular_movies(), self._catalog.fetch_genres()
            )
        except Exception as exc:
            self._fail(generation, exc)
        else:
            # genres are loaded only here, so they are kept even when a newer fetch won
            self.state.genres = list(genres)
            if self._is_current(generation):
                self.state.movies = list(page.results)
            logger.info(f"loaded {len(page.results)} popular movies and {len(genres)} genres")
        finally:
            self._end(generation)

    def _on_settled(self):
        # counted before the task starts so wait_idle cannot slip in between
        self._evaluating += 1
        return self._evaluate_settled()

    async def _evaluate_settled(self) -> None:
        try:
            await self.reevaluate()
        finally:
            self._evaluating -= 1
            self._update_idle()

    async def reevaluate(self) -> None:
        query = self.state.query
        if query.is_default:
            # only initialize() loads the popular list for the default query
            logger.debug("query is back to defaults, nothing to fetch")
            return

        operation = select_operation(query)
        logger.info(f"fetching {operation.kind} for {query}")
        generation = self._begin()
        try:
            page = await self._fetch(operation)
        except Exception as exc:
            self._fail(generation, exc)
        else:
            if self._is_current(generation):
                self.state.movies = filter_by_rating(page.results, query.min_rating)
        finally:
            self._end(generation)

    async def _fetch(self, operation: Operation) -> MoviePage:
        if operation.kind == SEARCH:
            return await self._catalog.search_movies(operation.argument)
        if operation.kind == BY_GENRE:
            return await self._catalog.fetch_movies_by_genre(operation.argument)
        return await self._catalog.fetch_popular_movies()

    def _begin(self) -> int:
        self._generation += 1
        self._in_flight += 1
        self.state.loading = True
        self.state.error = None
        self._update_idle()
        return self._generation

    def _end(self, generation: int) -> None:
        self._in_flight -= 1
        if generation == self._generation:
            self.state.loading = False
        self._update_idle()

    def _is_current(self, generation: int) -> bool:
        if generation != self._generation:
            logger.debug(f"dropping result of fetch {generation}, fetch {self._generation} is newer")
            return False
        return True

    def _fail(self, generation: int, exc: Exception) -> None:
        if isinstance(exc, CatalogError):
            message = exc.message
        else:
            logger.exception(f"unexpected error while fetching movies: {exc}")
            message = UNEXPECTED_ERROR
        if self._is_current(generation):
            logger.error(message)
            self.state.error = message
            self.state.movies = []

    def _update_idle(self) -> None:
        if self._debouncer.pending or self._in_flight or self._evaluating or self._starting:
            self._idle.clear()
        else:
            self._idle.set()

    async def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """Wait until no evaluation is pending and no fetch is running."""
        try:
            await asyncio.wait_for(self._idle.wait(), timeout)
        except asyncio.TimeoutError:
            return False
        return True

    def close(self) -> None:
        self._debouncer.cancel()
        self._update_idle()
