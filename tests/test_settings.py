import pytest
from pydantic import ValidationError

from core.settings import DEFAULT_SETTINGS_PATH, load_settings


def test_bundled_settings_load(monkeypatch):
    for name in ("SCHOOL_API_URL", "SCHOOL_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings(DEFAULT_SETTINGS_PATH)

    assert settings.api.base_url == "http://localhost:8080"
    assert settings.api.timeout_seconds is None
    assert settings.auth.cookie_name == "token"
    assert settings.grades.server_upsert is False


def test_env_overrides(tmp_path, monkeypatch):
    path = tmp_path / "settings.yaml"
    path.write_text("app:\n  name: Test\n", encoding="utf-8")
    monkeypatch.setenv("SCHOOL_API_URL", "http://api.internal:9000")
    monkeypatch.setenv("SCHOOL_LOG_LEVEL", "DEBUG")

    settings = load_settings(path)

    assert settings.api.base_url == "http://api.internal:9000"
    assert settings.app.log_level == "DEBUG"
    assert settings.auth.cookie_name == "token"


def test_missing_app_name_fails_fast(tmp_path, monkeypatch):
    monkeypatch.delenv("SCHOOL_LOG_LEVEL", raising=False)
    path = tmp_path / "settings.yaml"
    path.write_text("api:\n  base_url: http://x\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_settings(path)
