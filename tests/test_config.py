"""
Unit tests for environment-driven settings.
"""

from webcheck.config import Settings


def test_defaults(monkeypatch):
    for name in ("PORT", "CACHE_MAX_ENTRIES", "CACHE_TTL", "AUDIT_CONCURRENCY", "SINGLE_FLIGHT", "REDIS_URL"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings.from_env()

    assert settings.port == 4000
    assert settings.cache_max_entries == 200
    assert settings.cache_ttl == 900
    assert settings.audit_concurrency == 1
    assert settings.single_flight is True
    assert settings.rate_limit_max == 6
    assert settings.rate_limit_window == 60
    assert settings.redis_url == "redis://localhost:6379/0"


def test_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("SINGLE_FLIGHT", "0")
    monkeypatch.setenv("REDIS_URL", "")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = Settings.from_env()

    assert settings.port == 8080
    assert settings.single_flight is False
    assert settings.redis_url is None
    assert settings.log_level == "DEBUG"
