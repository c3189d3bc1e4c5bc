"""
Personal access token endpoints.

Tokens let scripts (e.g. a catalog import) manage folders with
`Authorization: Bearer bm_...` instead of an Auth0 login.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from models.user import User
from schemas.token import TokenCreate, TokenCreateResponse, TokenResponse
from services import token_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tokens", tags=["tokens"])


@router.post("/", response_model=TokenCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_token(
    data: TokenCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> TokenCreateResponse:
    """
    Create a personal access token.

    The plaintext token is only returned by this call. Store it securely.
    """
    api_token, plaintext = await token_service.create_token(db, current_user.id, data)
    metadata = TokenResponse.model_validate(api_token)
    return TokenCreateResponse(**metadata.model_dump(), token=plaintext)


@router.get("/", response_model=list[TokenResponse])
async def list_tokens(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[TokenResponse]:
    """List your tokens, newest first. Only metadata is returned."""
    tokens = await token_service.get_tokens(db, current_user.id)
    return [TokenResponse.model_validate(t) for t in tokens]


@router.delete("/{token_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_token(
    token_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Revoke one of your tokens. Other users' tokens look like missing ones."""
    if not await token_service.delete_token(db, current_user.id, token_id):
        logger.info("api_token_revoke_missed token_id=%s user_id=%s", token_id, current_user.id)
        raise HTTPException(status_code=404, detail="Token not found")
