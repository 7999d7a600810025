"""
Bounded store of per-session orchestrators.
"""

import time
from collections import OrderedDict
from typing import Callable, Optional

from streamify.logger import logger
from streamify.search.orchestrator import QueryOrchestrator


class SessionStore:
    """
    Keeps at most `max_sessions` orchestrators, least recently used first.

    Entries idle for longer than `idle_ttl` seconds are dropped on the next
    access. Dropped orchestrators are closed so their pending evaluation
    never fires.
    """

    def __init__(
        self,
        max_sessions: int = 1000,
        idle_ttl: float = 1800.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_sessions = max_sessions
        self.idle_ttl = idle_ttl
        self._clock = clock
        self._entries: OrderedDict[str, tuple[QueryOrchestrator, float]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._entries

    def get(self, session_id: str) -> Optional[QueryOrchestrator]:
        self.evict_expired()
        entry = self._entries.get(session_id)
        if entry is None:
            return None
        orchestrator, _ = entry
        self._entries[session_id] = (orchestrator, self._clock())
        self._entries.move_to_end(session_id)
        return orchestrator

    def add(self, session_id: str, orchestrator: QueryOrchestrator) -> None:
        self._entries[session_id] = (orchestrator, self._clock())
        self._entries.move_to_end(session_id)
        while len(self._entries) > self.max_sessions:
            self._evict_oldest("store full")

    def evict_expired(self) -> None:
        deadline = self._clock() - self.idle_ttl
        while self._entries:
            _, last_seen = next(iter(self._entries.values()))
            if last_seen > deadline:
                break
            self._evict_oldest("idle")

    def _evict_oldest(self, reason: str) -> None:
        session_id, (orchestrator, _) = self._entries.popitem(last=False)
        orchestrator.close()
        logger.info(f"dropped session {session_id} ({reason})")

    def close_all(self) -> None:
        while self._entries:
            _, (orchestrator, _) = self._entries.popitem(last=False)
            orchestrator.close()
