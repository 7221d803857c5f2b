# =============================================================================
# tests/test_config.py - Settings Tests
# =============================================================================

import pytest

from snippets.core.config import parse_bool, parse_level_overrides


class TestSettings:

    def test_loaded_from_environment(self, clean_settings):
        settings = clean_settings()

        assert settings.is_development()
        assert settings.log_level == "DEBUG"
        assert settings.database_url.startswith("sqlite:///")
        assert settings.feature_flags["FeatureB"] is True

    def test_cached(self, clean_settings):
        assert clean_settings() is clean_settings()

    def test_postgres_scheme_rewritten(self, clean_settings, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgres://u:p@host/db")
        assert clean_settings().database_url == "postgresql://u:p@host/db"

    def test_log_level_normalized(self, clean_settings, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        assert clean_settings().log_level == "WARNING"

    @pytest.mark.parametrize(
        "key, value",
        [
            ("LOG_LEVEL", "LOUD"),
            ("LOG_FORMAT", "xml"),
            ("FEATURE_FLAGS", "FeatureB"),
            ("BOOKSTORE_INIT_ON_STARTUP", "sometimes"),
        ],
    )
    def test_invalid_values_rejected(self, clean_settings, monkeypatch, key, value):
        monkeypatch.setenv(key, value)
        with pytest.raises(ValueError):
            clean_settings()

    def test_frozen(self, clean_settings):
        settings = clean_settings()
        with pytest.raises(AttributeError):
            settings.app_env = "production"


class TestParsers:

    @pytest.mark.parametrize("value", ["1", "true", "Yes", " ON "])
    def test_truthy(self, value):
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["0", "false", "No", "off"])
    def test_falsy(self, value):
        assert parse_bool(value) is False

    def test_level_overrides(self):
        assert parse_level_overrides("sqlalchemy.engine=info, uvicorn=WARNING") == {
            "sqlalchemy.engine": "INFO",
            "uvicorn": "WARNING",
        }

    def test_bad_level_override(self):
        with pytest.raises(ValueError):
            parse_level_overrides("sqlalchemy.engine=LOUD")
