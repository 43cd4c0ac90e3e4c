import pytest

from config import Settings, load_settings


def test_defaults(monkeypatch):
    for name in ["HISTORY_TOP_N", "HISTORY_POLICY", "HISTORY_NORMALIZE_NAMES",
                 "HISTORY_TIMEZONE", "LOG_LEVEL", "CORS_ORIGINS", "PORT"]:
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.top_n == 3
    assert settings.policy == "top_n"
    assert settings.normalize_names is False
    assert settings.timezone == "UTC"
    assert settings.log_level == "INFO"
    assert settings.port == 8000
    assert "http://localhost:3000" in settings.cors_origins


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///lifts.db")
    monkeypatch.setenv("HISTORY_TOP_N", "5")
    monkeypatch.setenv("HISTORY_POLICY", "Best_Of_Day")
    monkeypatch.setenv("HISTORY_NORMALIZE_NAMES", "yes")
    monkeypatch.setenv("HISTORY_TIMEZONE", "Asia/Tokyo")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.example, http://b.example")

    settings = load_settings()

    assert settings.database_url == "sqlite:///lifts.db"
    assert settings.top_n == 5
    assert settings.policy == "best_of_day"
    assert settings.normalize_names is True
    assert settings.timezone == "Asia/Tokyo"
    assert settings.log_level == "DEBUG"
    assert settings.cors_origins == ["http://a.example", "http://b.example"]


def test_database_url_built_from_parts(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("DB_USER", "lifter")
    monkeypatch.setenv("DB_PASSWORD", "secret")
    monkeypatch.setenv("DB_HOST", "db")
    monkeypatch.setenv("DB_PORT", "5433")
    monkeypatch.setenv("DB_NAME", "lifts")

    assert load_settings().database_url == "postgresql://lifter:secret@db:5433/lifts"


@pytest.mark.parametrize("kwargs", [
    {"top_n": 0},
    {"policy": "all"},
    {"timezone": "Mars/Olympus_Mons"},
])
def test_invalid_settings(kwargs):
    with pytest.raises(ValueError):
        Settings(database_url="sqlite://", **kwargs)


def test_non_numeric_top_n(monkeypatch):
    monkeypatch.setenv("HISTORY_TOP_N", "three")
    with pytest.raises(ValueError):
        load_settings()
