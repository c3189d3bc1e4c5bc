"""Pydantic schemas for personal access token endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TokenCreate(BaseModel):
    """Schema for creating a personal access token."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Label for the token, e.g., 'CLI', 'Catalog import'",
    )
    expires_in_days: int | None = Field(
        default=None,
        ge=1,
        le=365,
        description="Optional expiration in days (1-365). None means no expiration.",
    )


class TokenResponse(BaseModel):
    """Token metadata. Never includes the token itself."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    token_prefix: str
    last_used_at: datetime | None
    expires_at: datetime | None
    created_at: datetime


class TokenCreateResponse(TokenResponse):
    """
    Token metadata plus the plaintext token.

    Only returned by the create call; the plaintext cannot be retrieved again.
    """

    token: str = Field(
        ...,
        description="The plaintext token. Store this securely - it won't be shown again.",
    )
