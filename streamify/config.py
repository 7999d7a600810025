"""
Runtime settings read from the environment.
"""

import os
from dataclasses import dataclass, field

from streamify.logger import LOG_FORMAT, logger

DEFAULT_BASE_URL = "https://api.themoviedb.org/3"
IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"
PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/500x750/1a1a2e/e94560?text=No+Image"


@dataclass(frozen=True)
class Settings:
    tmdb_api_key: str = ""
    tmdb_base_url: str = DEFAULT_BASE_URL
    tmdb_timeout: float = 10.0
    debounce_ms: int = 500
    session_secret: str = field(default="streamify-dev-secret", repr=False)
    max_sessions: int = 1000
    session_ttl: float = 1800.0
    log_level: str = "INFO"
    log_format: str = LOG_FORMAT

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000


def load_settings() -> Settings:
    settings = Settings(
        tmdb_api_key=os.environ.get("TMDB_API_KEY", ""),
        tmdb_base_url=os.environ.get("TMDB_BASE_URL", DEFAULT_BASE_URL),
        tmdb_timeout=float(os.environ.get("TMDB_TIMEOUT", "10")),
        debounce_ms=int(os.environ.get("DEBOUNCE_MS", "500")),
        session_secret=os.environ.get("SESSION_SECRET", "streamify-dev-secret"),
        max_sessions=int(os.environ.get("MAX_SESSIONS", "1000")),
        session_ttl=float(os.environ.get("SESSION_TTL", "1800")),
        log_level=os.environ.get("LOG_LEVEL") or ("DEBUG" if os.environ.get("DEBUG") else "INFO"),
        log_format=os.environ.get("LOG_FORMAT", LOG_FORMAT),
    )
    if not settings.tmdb_api_key:
        logger.warning(
            "TMDB_API_KEY is not set, get one at https://www.themoviedb.org/settings/api"
        )
    return settings
