"""Tests for Settings."""

from skillrouter.config.settings import Settings, get_settings


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.skills_dirs == []
    assert settings.include_bundled is True
    assert settings.max_skills == 5
    assert settings.log_level == "INFO"


def test_env_comma_separated_dirs(monkeypatch):
    monkeypatch.setenv("SKILLROUTER_SKILLS_DIRS", "/a/skills, /b/skills")
    monkeypatch.setenv("SKILLROUTER_LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)

    assert settings.skills_dirs == ["/a/skills", "/b/skills"]
    assert settings.log_level == "DEBUG"


def test_env_json_dirs(monkeypatch):
    monkeypatch.setenv("SKILLROUTER_SKILLS_DIRS", '["/x", "/y"]')
    assert Settings(_env_file=None).skills_dirs == ["/x", "/y"]


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
