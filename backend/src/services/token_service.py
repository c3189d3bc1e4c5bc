"""
Personal access tokens (PATs) for scripted folder access.

Only a SHA-256 hash of each token is stored. The plaintext is handed back once,
when the token is created, and the first PREFIX_LENGTH characters are kept so a
user can tell their tokens apart.
"""
import hashlib
import logging
import secrets
from datetime import UTC, datetime, timedelta

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.api_token import ApiToken
from schemas.token import TokenCreate

logger = logging.getLogger(__name__)

TOKEN_PREFIX = "bm_"
PREFIX_LENGTH = 12


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def _is_expired(api_token: ApiToken, now: datetime) -> bool:
    expires_at = api_token.expires_at
    if expires_at is None:
        return False
    # SQLite hands back naive datetimes; they were written as UTC
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=UTC)
    return now > expires_at


async def create_token(
    db: AsyncSession,
    user_id: int,
    data: TokenCreate,
) -> tuple[ApiToken, str]:
    """
    Issue a new token for `user_id`.

    Returns:
        The stored token row and the plaintext token.
    """
    plaintext = TOKEN_PREFIX + secrets.token_urlsafe(32)
    expires_at = None
    if data.expires_in_days is not None:
        expires_at = datetime.now(UTC) + timedelta(days=data.expires_in_days)

    api_token = ApiToken(
        user_id=user_id,
        name=data.name,
        token_hash=hash_token(plaintext),
        token_prefix=plaintext[:PREFIX_LENGTH],
        expires_at=expires_at,
    )
    db.add(api_token)
    await db.flush()
    await db.refresh(api_token)
    logger.info("api_token_created token_id=%s user_id=%s", api_token.id, user_id)
    return api_token, plaintext


async def get_tokens(db: AsyncSession, user_id: int) -> list[ApiToken]:
    """A user's tokens, newest first."""
    result = await db.execute(
        select(ApiToken)
        .where(ApiToken.user_id == user_id)
        .order_by(ApiToken.created_at.desc(), ApiToken.id.desc()),
    )
    return list(result.scalars().all())


async def delete_token(db: AsyncSession, user_id: int, token_id: int) -> bool:
    """Revoke one of the user's tokens. Returns False if they have no such token."""
    result = await db.execute(
        delete(ApiToken).where(ApiToken.id == token_id, ApiToken.user_id == user_id),
    )
    if result.rowcount == 0:
        return False
    logger.info("api_token_revoked token_id=%s user_id=%s", token_id, user_id)
    return True


async def validate_token(db: AsyncSession, plaintext_token: str) -> ApiToken | None:
    """
    Look up a presented token and record its use.

    Returns None for unknown or expired tokens. last_used_at is only flushed;
    it is committed with the rest of the request.
    """
    result = await db.execute(
        select(ApiToken).where(ApiToken.token_hash == hash_token(plaintext_token)),
    )
    api_token = result.scalar_one_or_none()
    if api_token is None:
        return None

    now = datetime.now(UTC)
    if _is_expired(api_token, now):
        logger.info("api_token_expired token_id=%s", api_token.id)
        return None

    api_token.last_used_at = now
    await db.flush()
    return api_token
