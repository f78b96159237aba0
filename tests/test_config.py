import pytest

from calendar_engine.config import ConfigError, Settings, load_settings


ENV_VARS = (
    "CALENDAR_ENGINE_ENV",
    "CALENDAR_ENGINE_LOG_LEVEL",
    "CALENDAR_ENGINE_TIME_ZONE",
    "CALENDAR_ENGINE_TOP_N",
    "CALENDAR_ENGINE_ALLOWED_FRONTEND",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_when_nothing_is_set():
    assert load_settings(use_dotenv=False) == Settings()


def test_values_are_read_from_environment(monkeypatch):
    monkeypatch.setenv("CALENDAR_ENGINE_ENV", "staging")
    monkeypatch.setenv("CALENDAR_ENGINE_LOG_LEVEL", "debug")
    monkeypatch.setenv("CALENDAR_ENGINE_TIME_ZONE", "Europe/London")
    monkeypatch.setenv("CALENDAR_ENGINE_TOP_N", "5")
    monkeypatch.setenv("CALENDAR_ENGINE_ALLOWED_FRONTEND", "https://calendar.example.com")

    settings = load_settings(use_dotenv=False)

    assert settings.environment == "staging"
    assert settings.log_level == "DEBUG"
    assert settings.default_time_zone == "Europe/London"
    assert settings.search_top_n == 5
    assert settings.allowed_frontend == "https://calendar.example.com"


@pytest.mark.parametrize(
    "name,value",
    [
        ("CALENDAR_ENGINE_LOG_LEVEL", "chatty"),
        ("CALENDAR_ENGINE_TIME_ZONE", "Nowhere/Special"),
        ("CALENDAR_ENGINE_TOP_N", "ten"),
        ("CALENDAR_ENGINE_TOP_N", "0"),
    ],
)
def test_malformed_values_raise(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigError, match=name):
        load_settings(use_dotenv=False)


def test_dotenv_file_is_loaded(tmp_path, monkeypatch):
    # undone at teardown, along with whatever the .env file sets
    monkeypatch.setenv("CALENDAR_ENGINE_TOP_N", "1")
    monkeypatch.delenv("CALENDAR_ENGINE_TOP_N")
    (tmp_path / ".env").write_text("CALENDAR_ENGINE_TOP_N=3\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert load_settings().search_top_n == 3
