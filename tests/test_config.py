from streamify.config import Settings, load_settings
from streamify.logger import LOG_FORMAT, create_log_config


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("TMDB_API_KEY", "secret")
    monkeypatch.setenv("DEBOUNCE_MS", "250")
    monkeypatch.setenv("MAX_SESSIONS", "50")
    monkeypatch.setenv("LOG_LEVEL", "warning")
    settings = load_settings()
    assert settings.tmdb_api_key == "secret"
    assert settings.debounce_seconds == 0.25
    assert settings.max_sessions == 50
    assert settings.log_level == "warning"


def test_debug_switch_sets_log_level(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setenv("DEBUG", "1")
    assert load_settings().log_level == "DEBUG"


def test_log_config_follows_settings():
    settings = Settings(log_level="warning", log_format="%(levelprefix)s %(message)s")
    config = create_log_config(settings.log_level, settings.log_format)
    assert config["loggers"]["streamify"]["level"] == "WARNING"
    assert config["formatters"]["default"]["fmt"] == "%(levelprefix)s %(message)s"
    assert create_log_config("info")["formatters"]["default"]["fmt"] == LOG_FORMAT
