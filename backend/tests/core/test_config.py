"""Tests for application configuration."""
import pytest
from pydantic import ValidationError

from core.config import Settings
from models.folder import NAME_COLUMN_LENGTH


def make_settings(**kwargs: object) -> Settings:
    """Build settings without reading a .env file."""
    kwargs.setdefault("database_url", "postgresql://test")
    kwargs.setdefault("DEV_MODE", "false")
    return Settings(_env_file=None, **kwargs)


class TestCorsOriginsParsing:
    """Tests for CORS origins parsing from environment variables."""

    def test_parse_multiple_origins_with_whitespace(self) -> None:
        settings = make_settings(CORS_ORIGINS="  http://localhost:3000 , https://example.com,")
        assert settings.cors_origins == ["http://localhost:3000", "https://example.com"]

    def test_parse_empty_string(self) -> None:
        assert make_settings(CORS_ORIGINS="").cors_origins == []

    def test_default_cors_origins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("CORS_ORIGINS", raising=False)
        assert make_settings().cors_origins == ["http://localhost:3000"]


class TestAuth0Config:
    """Tests for Auth0 settings and the URLs derived from them."""

    def test_auth0_reads_env_names(self) -> None:
        settings = make_settings(
            AUTH0_DOMAIN="test.auth0.com",
            AUTH0_CLIENT_ID="test-client-id",
            AUTH0_AUDIENCE="https://test-api",
        )
        assert settings.auth0_domain == "test.auth0.com"
        assert settings.auth0_client_id == "test-client-id"
        assert settings.auth0_audience == "https://test-api"

    def test_auth0_derived_urls(self) -> None:
        settings = make_settings(AUTH0_DOMAIN="test.auth0.com")
        assert settings.auth0_issuer == "https://test.auth0.com/"
        assert settings.auth0_jwks_url == "https://test.auth0.com/.well-known/jwks.json"


class TestFolderSettings:
    """Tests for redirect targets and folder limits."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in [
            "LOGIN_URL",
            "ROOT_URL",
            "DEFAULT_DOCUMENT_TYPE",
            "MAX_FOLDER_NAME_LENGTH",
            "MAX_BOOKMARKS_PER_REQUEST",
        ]:
            monkeypatch.delenv(name, raising=False)

        settings = make_settings()

        assert settings.login_url == "/users/sign_in"
        assert settings.root_url == "/"
        assert settings.default_document_type == "SolrDocument"
        assert settings.max_folder_name_length == 100
        assert settings.max_bookmarks_per_request == 100

    def test_overrides_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOGIN_URL", "/login")
        monkeypatch.setenv("MAX_BOOKMARKS_PER_REQUEST", "25")

        settings = make_settings()

        assert settings.login_url == "/login"
        assert settings.max_bookmarks_per_request == 25

    def test_folder_name_length_can_be_lowered(self) -> None:
        assert make_settings(MAX_FOLDER_NAME_LENGTH="40").max_folder_name_length == 40

    @pytest.mark.parametrize("value", ["0", str(NAME_COLUMN_LENGTH + 1), "200"])
    def test_folder_name_length_must_fit_the_column(self, value: str) -> None:
        with pytest.raises(ValidationError, match="MAX_FOLDER_NAME_LENGTH"):
            make_settings(MAX_FOLDER_NAME_LENGTH=value)


class TestDevModeSecurityValidation:
    """Tests for DEV_MODE security guard against production database usage."""

    @pytest.mark.parametrize(
        "database_url",
        [
            "postgresql://localhost:5432/test",
            "postgresql://127.0.0.1:5432/test",
            "postgresql://[::1]:5432/test",
            "sqlite+aiosqlite:///./folders.db",
        ],
    )
    def test__dev_mode_allowed_with_local_database(self, database_url: str) -> None:
        settings = make_settings(database_url=database_url, DEV_MODE="true")
        assert settings.dev_mode is True

    @pytest.mark.parametrize(
        "database_url",
        [
            "postgresql://prod-db.example.com:5432/folders",
            "postgresql://192.168.1.100:5432/test",
            # No host at all is refused too
            "postgresql:///database",
        ],
    )
    def test__dev_mode_blocked_with_non_local_database(self, database_url: str) -> None:
        with pytest.raises(
            ValueError,
            match="DEV_MODE cannot be enabled with a non-local database",
        ):
            make_settings(database_url=database_url, DEV_MODE="true")

    def test__dev_mode_disabled_allows_production_database(self) -> None:
        settings = make_settings(database_url="postgresql://prod-db.example.com:5432/folders")
        assert settings.dev_mode is False


class TestEngineOptions:
    """Tests for the engine keyword arguments derived from settings."""

    def test_server_database_gets_pool_settings(self) -> None:
        from db.session import engine_options

        options = engine_options(make_settings(DB_POOL_SIZE="7", DB_MAX_OVERFLOW="3"))
        assert options == {"pool_pre_ping": True, "pool_size": 7, "max_overflow": 3}

    def test_sqlite_skips_pool_settings(self) -> None:
        from db.session import engine_options

        options = engine_options(make_settings(database_url="sqlite+aiosqlite:///./dev.db", DEV_MODE="true"))
        assert options == {"connect_args": {"check_same_thread": False}}
