"""Unit tests for application settings."""

import pydantic
import pytest

from orgguard.config import Settings


pytestmark = pytest.mark.unit


class TestDatabaseUrl:
    """Tests for the derived database settings."""

    def test_postgres_uses_asyncpg(self):
        settings = Settings(database_url="postgresql://u:p@db:5432/orgs")

        assert settings.async_database_url == "postgresql+asyncpg://u:p@db:5432/orgs"
        assert settings.is_sqlite is False

    def test_sqlite_is_unchanged(self):
        settings = Settings(database_url="sqlite+aiosqlite:///./orgs.db")

        assert settings.async_database_url == "sqlite+aiosqlite:///./orgs.db"
        assert settings.is_sqlite is True


class TestValidation:
    """Tests for settings validators."""

    def test_default_identity_header(self):
        assert Settings().identity_header == "X-User-Id"

    @pytest.mark.parametrize("header", ["X User", "", "X-User-Id:"])
    def test_invalid_identity_header(self, header: str):
        with pytest.raises(pydantic.ValidationError):
            Settings(identity_header=header)

    def test_log_level_is_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(pydantic.ValidationError):
            Settings(log_level="chatty")

    def test_environment_flags(self):
        settings = Settings(environment="production")

        assert settings.is_production is True
        assert settings.is_development is False
