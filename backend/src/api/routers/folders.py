"""
Folder endpoints.

Only `show` is open to anonymous callers. Every other route depends on
`get_current_user`, which redirects anonymous callers to sign in before the path
or body is validated. Routes that target a folder then ask services.folder_policy
whether the caller may act on it before calling the folder or bookmark services.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import (
    get_async_session,
    get_current_user,
    get_current_user_optional,
    get_settings,
)
from api.helpers import folder_location, redirect_to, referrer_or
from core.config import Settings
from models.folder import Folder, Visibility
from models.user import User
from schemas.folder import (
    BookmarkResponse,
    FolderBookmarksUpdate,
    FolderCreate,
    FolderDetailResponse,
    FolderDraft,
    FolderFormResponse,
    FolderResponse,
    FolderUpdate,
)
from services import bookmark_membership_service, folder_service
from services.exceptions import (
    AuthenticationRequiredError,
    BookmarkPersistenceError,
    FolderValidationError,
)
from services.folder_policy import FolderAction, can

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/folders", tags=["folders"])


async def _authorize(
    db: AsyncSession,
    user: User | None,
    folder_id: int,
    action: FolderAction,
    for_update: bool = False,
) -> Folder:
    """
    Load a folder and check that `user` may perform `action` on it.

    Raises:
        AuthenticationRequiredError: Anonymous caller was refused, or the folder
            does not exist.
        HTTPException: 404 if the folder does not exist or the caller may not
            see it, 403 if they may see it but not change it.
    """
    folder = await folder_service.get_folder(db, folder_id, for_update=for_update)
    if folder is not None and can(user, folder, action):
        return folder

    logger.info(
        "folder_access_denied folder_id=%s user_id=%s action=%s",
        folder_id,
        user.id if user else None,
        action,
    )
    if user is None:
        raise AuthenticationRequiredError()
    if folder is None or not can(user, folder, FolderAction.VIEW):
        raise HTTPException(status_code=404, detail="Folder not found")
    raise HTTPException(status_code=403, detail="Not authorized to modify this folder")


def _folder_response(folder: Folder, bookmarks_count: int) -> FolderResponse:
    return FolderResponse.model_validate(folder).model_copy(
        update={"bookmarks_count": bookmarks_count},
    )


@router.get("", response_model=list[FolderResponse])
async def list_folders(
    order_by: str | None = Query(
        default=None,
        description="Sort ascending by 'name', 'created_at' or 'updated_at'. "
        "Other values keep creation order.",
    ),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[FolderResponse]:
    """List your own folders and everyone's public folders."""
    folders = await folder_service.list_folders(db, current_user.id, order_by=order_by)
    counts = await folder_service.count_bookmarks(db, [f.id for f in folders])
    return [_folder_response(f, counts.get(f.id, 0)) for f in folders]


@router.get("/new", response_model=FolderFormResponse)
async def new_folder(
    current_user: User = Depends(get_current_user),
) -> FolderFormResponse:
    """Get a blank folder to fill in."""
    return FolderFormResponse(template="new", folder=FolderDraft())


@router.post("", response_model=FolderFormResponse)
async def create_folder(
    data: FolderCreate,
    request: Request,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> Response | FolderFormResponse:
    """
    Create a folder owned by the current user.

    Redirects to the new folder. If the input is invalid nothing is saved and
    the form is returned with the rejected values and error messages.
    """
    try:
        folder = await folder_service.create_folder(db, current_user.id, data)
    except FolderValidationError as e:
        logger.info("folder_create_invalid user_id=%s errors=%s", current_user.id, e.errors)
        return FolderFormResponse(
            template="new",
            folder=FolderDraft(name=data.name, visibility=data.visibility),
            errors=e.errors,
        )
    return redirect_to(folder_location(request, folder.id))


@router.get("/{folder_id}", response_model=FolderDetailResponse, name="show_folder")
async def get_folder(
    folder_id: int,
    current_user: User | None = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_async_session),
) -> FolderDetailResponse:
    """Get a folder and its bookmarks. Public folders need no sign-in."""
    folder = await _authorize(db, current_user, folder_id, FolderAction.VIEW)
    bookmarks = await folder_service.get_bookmarks(db, folder.id)
    response = FolderDetailResponse.model_validate(folder)
    return response.model_copy(update={
        "bookmarks_count": len(bookmarks),
        "bookmarks": [BookmarkResponse.model_validate(b) for b in bookmarks],
    })


@router.get("/{folder_id}/edit", response_model=FolderFormResponse)
async def edit_folder(
    folder_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> FolderFormResponse:
    """Get a folder for editing."""
    folder = await _authorize(db, current_user, folder_id, FolderAction.EDIT)
    return FolderFormResponse(template="edit", folder=FolderDraft.model_validate(folder))


@router.patch("/{folder_id}", response_model=FolderFormResponse)
async def update_folder(
    folder_id: int,
    data: FolderUpdate,
    request: Request,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> Response | FolderFormResponse:
    """
    Rename a folder or change its visibility.

    Redirects to the folder. If the input is invalid the folder is unchanged and
    the edit form is returned with the rejected values and error messages.
    """
    folder = await _authorize(db, current_user, folder_id, FolderAction.EDIT)
    try:
        await folder_service.update_folder(db, folder, data)
    except FolderValidationError as e:
        logger.info("folder_update_invalid folder_id=%s errors=%s", folder_id, e.errors)
        draft = FolderDraft.model_validate(folder).model_copy(update={
            "name": data.name,
            "visibility": data.visibility or Visibility(folder.visibility),
        })
        return FolderFormResponse(template="edit", folder=draft, errors=e.errors)
    return redirect_to(folder_location(request, folder.id))


@router.delete("/{folder_id}")
async def delete_folder(
    folder_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Delete a folder and all of its bookmarks, then redirect to the root page."""
    folder = await _authorize(db, current_user, folder_id, FolderAction.DESTROY)
    await folder_service.delete_folder(db, folder)
    return redirect_to(settings.root_url)


@router.patch("/{folder_id}/bookmarks", status_code=status.HTTP_303_SEE_OTHER)
async def update_folder_bookmarks(
    folder_id: int,
    data: FolderBookmarksUpdate,
    request: Request,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> Response:
    """
    Add documents to, or remove entries from, a folder.

    Send `document_ids` to add bookmarks or `item_ids` to remove entries.
    Entries that belong to other folders are ignored. Redirects back to the
    referring page; if the bookmarks could not be saved the redirect carries
    an X-Flash-Alert header.
    """
    action = (
        FolderAction.ADD_BOOKMARKS if data.document_ids is not None
        else FolderAction.REMOVE_BOOKMARKS
    )
    folder = await _authorize(db, current_user, folder_id, action, for_update=True)
    back = referrer_or(request, folder_location(request, folder_id))

    if action == FolderAction.REMOVE_BOOKMARKS:
        await bookmark_membership_service.remove_bookmarks(
            db, folder, current_user.id, data.item_ids,
        )
        return redirect_to(back)

    try:
        await bookmark_membership_service.add_bookmarks(
            db, folder, current_user.id, data.document_ids, document_type=data.document_type,
        )
    except BookmarkPersistenceError as e:
        return redirect_to(back, alert=str(e))
    return redirect_to(back)
