"""
Unit tests for backend/settings.py
"""

import pytest
from pydantic import ValidationError

from backend.settings import Settings, get_settings


# Environment variables that CI might set which we need to clear for default tests
CI_ENV_VARS = [
    "ENVIRONMENT",
    "SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "SUPABASE_ANON_KEY",
    "JWT_SECRET",
    "JWT_ISSUER",
    "JWT_AUDIENCE",
    "API_KEYS",
    "ENFORCE_SINGLE_ACTIVE_SESSION",
    "DEFAULT_PROGRAM_WEEKS",
    "SENTRY_DSN",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Clear CI environment variables to test true defaults."""
    for var in CI_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.mark.unit
class TestSettingsDefaults:
    """Test that Settings applies correct defaults."""

    def test_environment_default(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.environment == "development"

    def test_supabase_fields_default_to_none(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.supabase_url is None
        assert settings.supabase_service_role_key is None
        assert settings.supabase_anon_key is None

    def test_jwt_defaults(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.jwt_secret == "training-engine-jwt-secret-change-in-production"
        assert settings.jwt_issuer is None
        assert settings.jwt_audience is None

    def test_session_engine_defaults(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.enforce_single_active_session is False
        assert settings.default_program_weeks == 6

    def test_sentry_dsn_default_to_none(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.sentry_dsn is None


@pytest.mark.unit
class TestSettingsValidation:
    """Test Settings validation behavior."""

    def test_valid_environments_accepted(self):
        for env in ["development", "staging", "production", "test"]:
            settings = Settings(environment=env)
            assert settings.environment == env

    def test_environment_case_insensitive(self):
        settings = Settings(environment="PRODUCTION")
        assert settings.environment == "production"

    def test_invalid_environment_raises_error(self):
        with pytest.raises(ValidationError) as exc_info:
            Settings(environment="invalid")
        assert "Invalid environment" in str(exc_info.value)

    def test_program_weeks_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(default_program_weeks=0)


@pytest.mark.unit
class TestSettingsProperties:
    """Test Settings computed properties."""

    def test_supabase_key_prefers_service_role(self, clean_env):
        settings = Settings(
            _env_file=None,
            supabase_service_role_key="service-key",
            supabase_anon_key="anon-key",
        )
        assert settings.supabase_key == "service-key"

    def test_supabase_key_falls_back_to_anon(self, clean_env):
        settings = Settings(
            _env_file=None,
            supabase_service_role_key=None,
            supabase_anon_key="anon-key",
        )
        assert settings.supabase_key == "anon-key"

    def test_supabase_key_returns_none_if_neither(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.supabase_key is None

    def test_api_keys_list_parses_comma_separated(self):
        settings = Settings(api_keys="key1:user-1, key2:user-2:trainer")
        assert settings.api_keys_list == ["key1:user-1", "key2:user-2:trainer"]

    def test_api_keys_list_handles_empty(self):
        settings = Settings(api_keys="")
        assert settings.api_keys_list == []

    def test_environment_flags(self):
        assert Settings(environment="production").is_production is True
        assert Settings(environment="development").is_development is True
        assert Settings(environment="test").is_test is True
        assert Settings(environment="staging").is_production is False


@pytest.mark.unit
class TestGetSettings:
    """Test get_settings() function."""

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert isinstance(settings1, Settings)
        assert settings1 is settings2

    def test_get_settings_cache_can_be_cleared(self):
        get_settings.cache_clear()
        settings1 = get_settings()
        get_settings.cache_clear()
        settings2 = get_settings()
        assert settings1 is not settings2


@pytest.mark.unit
class TestSettingsFromEnv:
    """Test Settings loading from environment variables."""

    def test_settings_loads_from_env(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "staging")
        monkeypatch.setenv("SUPABASE_URL", "https://test.supabase.co")
        monkeypatch.setenv("JWT_SECRET", "my-secret")
        monkeypatch.setenv("DEFAULT_PROGRAM_WEEKS", "8")

        get_settings.cache_clear()
        settings = Settings()

        assert settings.environment == "staging"
        assert settings.supabase_url == "https://test.supabase.co"
        assert settings.jwt_secret == "my-secret"
        assert settings.default_program_weeks == 8

    def test_boolean_env_vars_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("ENFORCE_SINGLE_ACTIVE_SESSION", "TRUE")

        settings = Settings()

        assert settings.enforce_single_active_session is True
