"""Tests for application settings."""

import pytest
from pydantic import SecretStr, ValidationError

from userhub.config import Settings, clear_settings_cache, get_settings


@pytest.fixture
def clean_settings_cache():
    clear_settings_cache()
    yield
    clear_settings_cache()


class TestSettings:
    def test_defaults(self):
        settings = Settings(jwt_secret_key=SecretStr("secret"))

        assert settings.app_name == "userhub"
        assert settings.database_url.startswith("sqlite+aiosqlite://")
        assert settings.database_type == "sqlite"
        assert settings.jwt_access_token_expire_hours == 1
        assert settings.jwt_refresh_token_expire_days == 7
        assert settings.bcrypt_rounds == 12
        assert settings.registration_open is True
        assert settings.cors_origins == []

    def test_jwt_secret_is_required(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET_KEY", raising=False)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET_KEY", "from-env")
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db/userhub")
        monkeypatch.setenv("BCRYPT_ROUNDS", "10")
        monkeypatch.setenv("REGISTRATION_OPEN", "false")

        settings = Settings(_env_file=None)

        assert settings.jwt_secret_key.get_secret_value() == "from-env"
        assert settings.database_type == "postgresql"
        assert settings.bcrypt_rounds == 10
        assert settings.registration_open is False

    def test_api_debug_is_the_only_debug_switch(self, monkeypatch):
        monkeypatch.setenv("DEBUG", "true")

        settings = Settings(jwt_secret_key=SecretStr("secret"), _env_file=None)

        assert "debug" not in Settings.model_fields
        assert settings.api_debug is False

    def test_cors_origins_are_split_and_trimmed(self):
        settings = Settings(
            jwt_secret_key=SecretStr("secret"),
            api_cors_origins="http://a.test, http://b.test ,",
        )

        assert settings.cors_origins == ["http://a.test", "http://b.test"]

    def test_cors_origins_accept_list(self):
        settings = Settings(
            jwt_secret_key=SecretStr("secret"),
            api_cors_origins=["http://a.test", "http://b.test"],
        )

        assert settings.api_cors_origins == "http://a.test,http://b.test"

    def test_secret_is_not_rendered(self):
        settings = Settings(jwt_secret_key=SecretStr("top-secret"))
        assert "top-secret" not in repr(settings)


class TestGetSettings:
    def test_is_cached_until_cleared(self, monkeypatch, clean_settings_cache):
        monkeypatch.setenv("JWT_SECRET_KEY", "first")
        first = get_settings()
        monkeypatch.setenv("JWT_SECRET_KEY", "second")

        assert get_settings() is first

        clear_settings_cache()
        assert get_settings().jwt_secret_key.get_secret_value() == "second"
