"""Unit tests for application settings."""
import os
from unittest.mock import patch

from orquestra.core.settings import Settings, get_settings


class TestSettings:
    """Test settings defaults and environment variable overrides."""

    def test_defaults(self):
        """Test that settings have correct defaults."""
        settings = Settings(_env_file=None)

        assert settings.algorithm == "HS256"
        assert settings.access_token_expire_minutes == 60 * 24
        assert settings.redis_url == "redis://localhost:6379/0"
        assert settings.celery_task_always_eager is False
        assert settings.log_level == "INFO"
        assert settings.environment == "development"

    def test_cors_origins_list_splits_and_strips(self):
        settings = Settings(_env_file=None, cors_origins=" http://a.test , ,http://b.test ")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    @patch.dict(os.environ, {
        "DATABASE_URL": "postgresql://u:p@db:5432/orquestra_test",
        "SECRET_KEY": "override-secret",
        "ENVIRONMENT": "prod",
    })
    def test_env_overrides_basic_fields(self):
        """Test that environment variables override string settings."""
        settings = Settings(_env_file=None)
        assert settings.database_url == "postgresql://u:p@db:5432/orquestra_test"
        assert settings.secret_key == "override-secret"
        assert settings.environment == "prod"

    @patch.dict(os.environ, {
        "ACCESS_TOKEN_EXPIRE_MINUTES": "30",
        "CELERY_TASK_ALWAYS_EAGER": "true",
        "DEBUG": "1",
    })
    def test_env_overrides_typed_fields(self):
        """Test that numeric and boolean settings are parsed from the environment."""
        settings = Settings(_env_file=None)
        assert settings.access_token_expire_minutes == 30
        assert settings.celery_task_always_eager is True
        assert settings.debug is True

    def test_get_settings_function(self):
        """Test the get_settings function returns a cached Settings instance."""
        settings = get_settings()
        assert isinstance(settings, Settings)
        assert get_settings() is settings
