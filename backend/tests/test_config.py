"""Tests for environment-driven settings."""
from app.core.config import Settings


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("NEO4J_URI", "neo4j://graph:7687")
    monkeypatch.setenv("UPLOAD_MAX_BYTES", "1024")
    monkeypatch.setenv("RATE_LIMIT_ENABLED", "false")

    s = Settings(_env_file=None)

    assert s.NEO4J_URI == "neo4j://graph:7687"
    assert s.UPLOAD_MAX_BYTES == 1024
    assert s.RATE_LIMIT_ENABLED is False


def test_cors_origins_are_split_and_trimmed():
    s = Settings(_env_file=None, CORS_ORIGINS="http://a.test, http://b.test")
    assert s.cors_origins_list == ["http://a.test", "http://b.test"]


def test_only_settings_the_service_reads_are_declared():
    assert "APP_BASE_URL" not in Settings.model_fields
    assert {"NEO4J_URI", "NEO4J_DATABASE", "UPLOAD_RATE_LIMIT", "LOG_LEVEL"} <= set(Settings.model_fields)
