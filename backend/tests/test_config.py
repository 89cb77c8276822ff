"""Tests for settings loading."""
from resume_intake.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.gemini_model == "gemini-2.5-flash"
    assert settings.pdf_render_scale == 1.5
    assert settings.auto_parse_default is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("AUTO_PARSE_DEFAULT", "true")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    settings = Settings(_env_file=None)
    assert settings.auto_parse_default is True
    assert settings.get_cors_origins() == ["http://a.test", "http://b.test"]
