"""Authentication module for Auth0 JWT validation and PAT support."""
import logging

import httpx
import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt import PyJWKClient
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from db.session import get_async_session
from models.user import User
from services import token_service
from services.exceptions import AuthenticationRequiredError

logger = logging.getLogger(__name__)


# HTTP Bearer token scheme; a missing header is not an error by itself because
# public folders can be viewed anonymously
security = HTTPBearer(auto_error=False)

# Cache for JWKS client (reuse across requests)
_jwks_clients: dict[str, PyJWKClient] = {}

DEV_USER_AUTH0_ID = "dev|local-development-user"


def get_jwks_client(settings: Settings) -> PyJWKClient:
    """Get or create a cached JWKS client for the given settings."""
    if settings.auth0_jwks_url not in _jwks_clients:
        _jwks_clients[settings.auth0_jwks_url] = PyJWKClient(
            settings.auth0_jwks_url,
            cache_jwk_set=True,
            lifespan=3600,  # Cache keys for 1 hour
        )
    return _jwks_clients[settings.auth0_jwks_url]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_jwt(token: str, settings: Settings) -> dict:
    """
    Decode and validate a JWT token from Auth0.

    Raises:
        HTTPException: If token is invalid, expired, or has wrong audience/issuer.
    """
    try:
        jwks_client = get_jwks_client(settings)
        signing_key = jwks_client.get_signing_key_from_jwt(token)

        return jwt.decode(
            token,
            signing_key.key,
            algorithms=["RS256"],
            audience=settings.auth0_audience,
            issuer=settings.auth0_issuer,
        )

    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.InvalidAudienceError:
        raise _unauthorized("Invalid audience")
    except jwt.InvalidIssuerError:
        raise _unauthorized("Invalid issuer")
    except jwt.PyJWTError as e:
        # Log full details for debugging (server-side only)
        logger.warning("JWT validation failed: %s", e, exc_info=True)
        raise _unauthorized("Invalid token")
    except httpx.HTTPError as e:
        logger.error("Failed to fetch JWKS from Auth0: %s", e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Could not validate credentials",
        )


async def get_or_create_user(
    db: AsyncSession,
    auth0_id: str,
    email: str | None = None,
) -> User:
    """
    Get existing user or create new one from Auth0 claims.

    Concurrent first requests from the same user may both try to insert. The
    loser hits the unique constraint on auth0_id, rolls back and re-reads.

    Note: Uses flush(), not commit. Session generator handles commit at request end.
    This runs before any other database work in the request, so the rollback on
    IntegrityError cannot discard anything else.
    """
    query = select(User).where(User.auth0_id == auth0_id)
    user = (await db.execute(query)).scalar_one_or_none()

    if user is None:
        user = User(auth0_id=auth0_id, email=email)
        db.add(user)
        try:
            await db.flush()
            logger.info("user_created user_id=%s", user.id)
        except IntegrityError:
            await db.rollback()
            user = (await db.execute(query)).scalar_one()

    # Keep email in sync with the identity provider
    if email and user.email != email:
        user.email = email
        await db.flush()

    return user


async def get_or_create_dev_user(db: AsyncSession) -> User:
    """Get or create a development user for DEV_MODE."""
    return await get_or_create_user(db, auth0_id=DEV_USER_AUTH0_ID, email="dev@localhost")


async def validate_pat(db: AsyncSession, token: str) -> User:
    """
    Validate a Personal Access Token (PAT) and return the associated user.

    Raises:
        HTTPException: If token is invalid, expired, or its user no longer exists.
    """
    api_token = await token_service.validate_token(db, token)
    if api_token is None:
        raise _unauthorized("Invalid or expired token")

    user = await db.get(User, api_token.user_id)
    if user is None:
        raise _unauthorized("User not found")

    return user


async def authenticate(
    credentials: HTTPAuthorizationCredentials | None,
    db: AsyncSession,
    settings: Settings,
) -> User | None:
    """
    Resolve the requesting user.

    Supports both:
    - Auth0 JWTs (for the web UI)
    - Personal Access Tokens (PATs) starting with 'bm_' (for scripts)

    In DEV_MODE, bypasses auth and returns a local development user.

    Returns:
        The user, or None when the request carries no credentials.

    Raises:
        HTTPException: If credentials were sent but are not valid.
    """
    if settings.dev_mode:
        return await get_or_create_dev_user(db)

    if credentials is None:
        return None

    token = credentials.credentials

    if token.startswith(token_service.TOKEN_PREFIX):
        return await validate_pat(db, token)

    payload = decode_jwt(token, settings)

    auth0_id = payload.get("sub")
    if not auth0_id:
        raise _unauthorized("Invalid token: missing sub claim")

    return await get_or_create_user(db, auth0_id=auth0_id, email=payload.get("email"))


async def get_current_user_optional(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> User | None:
    """
    Dependency that returns the current user, or None for anonymous requests.

    Used by routes that anonymous callers may reach (e.g. viewing a public folder).
    """
    return await authenticate(credentials, db, settings)


async def get_current_user(
    user: User | None = Depends(get_current_user_optional),
) -> User:
    """
    Dependency that requires a signed-in user.

    Raises:
        AuthenticationRequiredError: For anonymous requests; the app answers with
            a redirect to the sign-in location.
    """
    if user is None:
        raise AuthenticationRequiredError()
    return user
