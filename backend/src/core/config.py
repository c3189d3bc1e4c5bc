"""Application configuration using pydantic-settings."""
from functools import lru_cache
from urllib.parse import urlparse

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from models.folder import NAME_COLUMN_LENGTH


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Database
    database_url: str
    db_pool_size: int = Field(default=5, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=10, validation_alias="DB_MAX_OVERFLOW")

    # Auth0
    auth0_domain: str = Field(default="", validation_alias="AUTH0_DOMAIN")
    auth0_audience: str = Field(default="", validation_alias="AUTH0_AUDIENCE")
    auth0_client_id: str = Field(default="", validation_alias="AUTH0_CLIENT_ID")

    # Development mode - bypasses auth for local development
    dev_mode: bool = Field(default=False, validation_alias="DEV_MODE")

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(
        default="http://localhost:3000",
        validation_alias="CORS_ORIGINS",
    )

    # Redirect targets
    login_url: str = Field(default="/users/sign_in", validation_alias="LOGIN_URL")
    root_url: str = Field(default="/", validation_alias="ROOT_URL")

    # Folders and bookmarks
    default_document_type: str = Field(
        default="SolrDocument", validation_alias="DEFAULT_DOCUMENT_TYPE",
    )
    max_folder_name_length: int = Field(
        default=NAME_COLUMN_LENGTH,
        ge=1,
        le=NAME_COLUMN_LENGTH,
        validation_alias="MAX_FOLDER_NAME_LENGTH",
    )
    max_bookmarks_per_request: int = Field(
        default=100, validation_alias="MAX_BOOKMARKS_PER_REQUEST",
    )

    @model_validator(mode="after")
    def validate_dev_mode_security(self) -> "Settings":
        """
        Prevent DEV_MODE from being enabled with a production database.

        DEV_MODE completely bypasses authentication, so it may only be used
        with a database on the local machine.
        """
        if not self.dev_mode:
            return self

        try:
            hostname = urlparse(self.database_url).hostname or ""
        except ValueError:
            hostname = ""

        # SQLite URLs have no host and are always local
        is_sqlite = self.database_url.startswith("sqlite")
        local_hosts = {"localhost", "127.0.0.1", "0.0.0.0", "::1"}
        if not is_sqlite and hostname.lower() not in local_hosts:
            raise ValueError(
                f"DEV_MODE cannot be enabled with a non-local database. "
                f"Database host '{hostname}' appears to be a production database. "
                f"DEV_MODE bypasses all authentication and must only be used locally.",
            )

        return self

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    @property
    def auth0_issuer(self) -> str:
        """Get the Auth0 issuer URL."""
        return f"https://{self.auth0_domain}/"

    @property
    def auth0_jwks_url(self) -> str:
        """Get the Auth0 JWKS URL for fetching public keys."""
        return f"https://{self.auth0_domain}/.well-known/jwks.json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
