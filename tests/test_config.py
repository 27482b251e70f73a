# tests/test_config.py
from catalog.config import DEFAULT_API_KEY, Settings


def test_defaults(monkeypatch):
    for var in ("HOST", "PORT", "API_KEY", "LOG_LEVEL", "ALLOWED_ORIGINS"):
        monkeypatch.delenv(var, raising=False)
    s = Settings.from_env()
    assert s.port == 3000
    assert s.api_key == DEFAULT_API_KEY
    assert s.allowed_origins == ["*"]


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("API_KEY", "s3cret")
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.test, http://b.test")
    s = Settings.from_env()
    assert s.port == 8080
    assert s.api_key == "s3cret"
    assert s.allowed_origins == ["http://a.test", "http://b.test"]


def test_empty_api_key_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("API_KEY", "")
    assert Settings.from_env().api_key == DEFAULT_API_KEY
