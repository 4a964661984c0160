"""Tests for src.core.config module."""

import pytest

from src.core.config import Settings
from src.core.errors import MissingConfiguration


REQUIRED_ENV = {
    "STRAPI_URL": "https://cms.example.org/api",
    "STRAPI_TOKEN": "secret-token",
    "PROVIDER_UBA_UI_URL": "https://provider.example.org",
    "BPP_ID": "benefits-bpp.example.org",
    "BPP_URI": "https://benefits-bpp.example.org",
}


@pytest.fixture
def env(monkeypatch):
    for key, value in REQUIRED_ENV.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    return monkeypatch


def test_from_env(env):
    settings = Settings.from_env(dotenv=False).validate()

    assert settings.strapi_url == "https://cms.example.org/api"
    assert settings.provider_url == "https://provider.example.org"
    assert settings.bpp_id == "benefits-bpp.example.org"
    assert settings.database_url == "applications.db"
    assert settings.log_level == "INFO"


def test_optional_values(env):
    env.setenv("DATABASE_URL", "postgresql://localhost/benefits")
    env.setenv("LOG_LEVEL", "DEBUG")

    settings = Settings.from_env(dotenv=False)

    assert settings.database_url == "postgresql://localhost/benefits"
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("missing", sorted(REQUIRED_ENV))
def test_missing_required_value(env, missing):
    env.delenv(missing)

    with pytest.raises(MissingConfiguration) as exc_info:
        Settings.from_env(dotenv=False).validate()

    assert exc_info.value.missing == [missing]
    assert missing in str(exc_info.value)


def test_blank_value_counts_as_missing(env):
    env.setenv("BPP_URI", "   ")
    env.setenv("STRAPI_TOKEN", "")

    with pytest.raises(MissingConfiguration) as exc_info:
        Settings.from_env(dotenv=False).validate()

    assert set(exc_info.value.missing) == {"BPP_URI", "STRAPI_TOKEN"}


def test_repr_hides_token(env):
    assert "secret-token" not in repr(Settings.from_env(dotenv=False))
