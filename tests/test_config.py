"""Tests for environment-driven configuration."""
import pytest

from hypothesis_api import (
    ClientSettings,
    ConfigurationError,
    DEVELOPMENT_API_URL,
    HypothesisAPI,
    PRODUCTION_API_URL,
)

ENV_VARS = [
    "HYPOTHESIS_API_KEY",
    "HYPOTHESIS_API_URL",
    "HYPOTHESIS_DEBUG",
    "HYPOTHESIS_TIMEOUT",
    "HYPOTHESIS_MAX_RETRIES",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate from the developer's shell and any local .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_settings_defaults():
    settings = ClientSettings()
    assert settings.api_key is None
    assert settings.api_url == DEVELOPMENT_API_URL
    assert settings.debug is False
    assert settings.timeout == 30
    assert settings.max_retries == 0


def test_from_env(monkeypatch):
    monkeypatch.setenv("HYPOTHESIS_API_KEY", "envKey")
    monkeypatch.setenv("HYPOTHESIS_API_URL", PRODUCTION_API_URL)
    monkeypatch.setenv("HYPOTHESIS_DEBUG", "true")
    monkeypatch.setenv("HYPOTHESIS_TIMEOUT", "5")

    api = HypothesisAPI.from_env()

    assert api.api_key == "envKey"
    assert api.base_url == f"{PRODUCTION_API_URL}/v1"
    assert api.debug is True
    assert api.timeout == 5


def test_from_env_reads_dotenv_file(tmp_path):
    (tmp_path / ".env").write_text("HYPOTHESIS_API_KEY=fileKey\nUNRELATED=1\n", encoding="utf-8")
    api = HypothesisAPI.from_env()
    assert api.api_key == "fileKey"


def test_from_env_overrides(monkeypatch):
    monkeypatch.setenv("HYPOTHESIS_API_KEY", "envKey")
    api = HypothesisAPI.from_env(api_key="explicit", session_id="c1")
    assert api.api_key == "explicit"
    assert api.session_id == "c1"


def test_from_env_without_key_fails():
    with pytest.raises(ConfigurationError):
        HypothesisAPI.from_env()


@pytest.mark.parametrize("name", ["HYPOTHESIS_TIMEOUT", "HYPOTHESIS_MAX_RETRIES"])
def test_from_env_malformed_number_fails(monkeypatch, name):
    monkeypatch.setenv("HYPOTHESIS_API_KEY", "envKey")
    monkeypatch.setenv(name, "soon")
    with pytest.raises(ConfigurationError, match=name[len("HYPOTHESIS_"):].lower()):
        HypothesisAPI.from_env()
