import warnings

import pytest
from pydantic import ValidationError
from rolodex.core.config import settings_for
from rolodex.core.settings.base import Settings
from rolodex.core.settings.production import Settings as ProductionSettings
from rolodex.core.settings.staging import Settings as StagingSettings
from rolodex.libs.throttler import build_limiter

from tests.helpers import make_settings


class TestSettings:
    def test_defaults(self):
        settings = make_settings()

        assert settings.PORT == 3000
        assert settings.CACHE_TTL == 10
        assert settings.AUTH_TOKEN_MAX_AGE == 3600
        assert settings.PASSWORD_HASH_ROUNDS == 4

    def test_random_secret_by_default(self):
        assert Settings().AUTH_SECRET_KEY != Settings().AUTH_SECRET_KEY

    def test_jwt_secret_alias(self, monkeypatch):
        monkeypatch.delenv("AUTH_SECRET_KEY", raising=False)
        monkeypatch.setenv("JWT_SECRET_KEY", "from-the-environment")

        assert Settings().AUTH_SECRET_KEY == "from-the-environment"

    def test_default_secret_warns_locally(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            make_settings(AUTH_SECRET_KEY="changethis")

        assert any("AUTH_SECRET_KEY" in str(warning.message) for warning in caught)

    def test_default_secret_rejected_when_deployed(self):
        with pytest.raises(ValidationError, match="AUTH_SECRET_KEY"):
            make_settings(ENVIRONMENT="production", AUTH_SECRET_KEY="changethis")

    def test_cache_ttl_must_be_positive(self):
        with pytest.raises(ValidationError, match="CACHE_TTL"):
            make_settings(CACHE_TTL=0)

    def test_database_url_takes_precedence(self):
        settings = make_settings(DATABASE_URL="sqlite+aiosqlite:///rolodex.db")

        assert settings.SQLALCHEMY_DATABASE_URI == "sqlite+aiosqlite:///rolodex.db"

    def test_cors_origins_from_string(self):
        settings = make_settings(BACKEND_CORS_ORIGINS="http://localhost:5173, https://example.com")

        assert [str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS] == [
            "http://localhost:5173",
            "https://example.com",
        ]


class TestEnvironmentSettings:
    def test_settings_for(self):
        assert settings_for("PRODUCTION") is ProductionSettings
        assert settings_for("staging") is StagingSettings

    def test_settings_for_unknown_environment(self):
        with pytest.raises(ValueError, match="Invalid environment"):
            settings_for("qa")

    def test_production_defaults(self):
        settings = ProductionSettings(AUTH_SECRET_KEY="a-real-secret", DATABASE_URL="postgresql+psycopg://u:p@db/rolodex")

        assert settings.STORE_BACKEND == "database"
        assert settings.CACHE_BACKEND == "redis"
        assert settings.OPENAPI_DOCS_URL is None


class TestLimiterConfig:
    def test_auth_namespace_has_its_own_limit(self):
        limiter = build_limiter(make_settings(AUTH_RATE_LIMIT="5/minute", RATE_LIMIT_PER_MINUTE=50))

        assert limiter.limit_for("auth").amount == 5
        assert limiter.limit_for("anything").amount == 50
