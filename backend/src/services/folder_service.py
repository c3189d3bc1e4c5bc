"""
Service layer for folder storage.

Functions take the acting user's id explicitly; authorization is decided by the
caller through services.folder_policy before anything here runs.

Note: Uses flush(), not commit. The session generator commits at request end.
"""
import logging
from collections.abc import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import get_settings
from models.bookmark import Bookmark
from models.folder import Folder
from schemas.folder import FolderCreate, FolderUpdate
from services.exceptions import BookmarkPersistenceError, FolderValidationError
from services.folder_policy import visible_to

logger = logging.getLogger(__name__)

# order_by values accepted by list_folders, mapped to their columns
ORDERABLE_COLUMNS = {
    "name": Folder.name,
    "created_at": Folder.created_at,
    "updated_at": Folder.updated_at,
}


def validate_folder_name(name: str | None) -> str:
    """
    Validate and normalize a folder name.

    Returns:
        The name with surrounding whitespace removed.

    Raises:
        FolderValidationError: If the name is missing, blank, or too long.
    """
    normalized = (name or "").strip()
    if not normalized:
        raise FolderValidationError(["Name can't be blank"])
    max_length = get_settings().max_folder_name_length
    if len(normalized) > max_length:
        raise FolderValidationError(
            [f"Name is too long (maximum is {max_length} characters)"],
        )
    return normalized


async def create_folder(
    db: AsyncSession,
    owner_id: int,
    data: FolderCreate,
) -> Folder:
    """
    Create a folder owned by `owner_id`.

    Raises:
        FolderValidationError: If the name is invalid. Nothing is added to the session.
    """
    name = validate_folder_name(data.name)
    folder = Folder(user_id=owner_id, name=name, visibility=data.visibility.value)
    db.add(folder)
    await db.flush()
    await db.refresh(folder)
    logger.info("folder_created folder_id=%s user_id=%s", folder.id, owner_id)
    return folder


async def get_folder(
    db: AsyncSession,
    folder_id: int,
    for_update: bool = False,
) -> Folder | None:
    """
    Get a folder by ID, regardless of owner.

    Args:
        db: Database session.
        folder_id: ID of the folder.
        for_update: Lock the folder row until the transaction ends, so concurrent
            membership changes to the same folder run one after another.

    Returns:
        The folder, or None if it does not exist.
    """
    query = select(Folder).where(Folder.id == folder_id)
    if for_update:
        query = query.with_for_update()
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def update_folder(
    db: AsyncSession,
    folder: Folder,
    data: FolderUpdate,
) -> Folder:
    """
    Update the fields that were sent.

    Raises:
        FolderValidationError: If a name was sent and is invalid. The folder is
            left untouched.
    """
    update_data = data.model_dump(exclude_unset=True)

    # Validate everything before touching the folder
    if "name" in update_data:
        update_data["name"] = validate_folder_name(update_data["name"])
    if update_data.get("visibility") is None:
        update_data.pop("visibility", None)

    for field, value in update_data.items():
        setattr(folder, field, value)

    await db.flush()
    await db.refresh(folder)
    logger.info("folder_updated folder_id=%s fields=%s", folder.id, sorted(update_data))
    return folder


async def delete_folder(db: AsyncSession, folder: Folder) -> None:
    """Delete a folder and every bookmark in it."""
    folder_id = folder.id
    result = await db.execute(delete(Bookmark).where(Bookmark.folder_id == folder_id))
    await db.delete(folder)
    await db.flush()
    logger.info(
        "folder_deleted folder_id=%s bookmarks_deleted=%s", folder_id, result.rowcount,
    )


async def list_folders(
    db: AsyncSession,
    user_id: int,
    order_by: str | None = None,
) -> list[Folder]:
    """
    Get the folders a user may view: their own plus all public folders.

    Args:
        db: Database session.
        user_id: ID of the user listing folders.
        order_by: "name", "created_at" or "updated_at" for an ascending sort.
            Anything else falls back to creation order.
    """
    column = ORDERABLE_COLUMNS.get(order_by or "")
    query = select(Folder).where(visible_to(user_id))
    if column is not None:
        query = query.order_by(column, Folder.id)
    else:
        query = query.order_by(Folder.id)
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_bookmarks(db: AsyncSession, folder_id: int) -> list[Bookmark]:
    """Get a folder's bookmarks in position order."""
    result = await db.execute(
        select(Bookmark)
        .where(Bookmark.folder_id == folder_id)
        .order_by(Bookmark.position, Bookmark.id),
    )
    return list(result.scalars().all())


async def count_bookmarks(db: AsyncSession, folder_ids: Sequence[int]) -> dict[int, int]:
    """Get bookmark counts keyed by folder id. Folders without bookmarks are omitted."""
    if not folder_ids:
        return {}
    result = await db.execute(
        select(Bookmark.folder_id, func.count(Bookmark.id))
        .where(Bookmark.folder_id.in_(folder_ids))
        .group_by(Bookmark.folder_id),
    )
    return {folder_id: count for folder_id, count in result.all()}


async def get_max_position(db: AsyncSession, folder_id: int) -> int:
    """Get the highest bookmark position in a folder (0 when empty)."""
    result = await db.execute(
        select(func.coalesce(func.max(Bookmark.position), 0))
        .where(Bookmark.folder_id == folder_id),
    )
    return result.scalar_one()


async def save_bookmarks(
    db: AsyncSession,
    folder: Folder,
    bookmarks: Sequence[Bookmark],
) -> None:
    """
    Persist a batch of new bookmarks for `folder` as one unit.

    The batch is written inside a savepoint: either every entry is flushed or,
    on a database error, the savepoint is rolled back and nothing from the batch
    remains in the session.

    Raises:
        BookmarkPersistenceError: If the database rejected the batch.
    """
    # Read before the savepoint; a rollback expires objects touched inside it
    folder_id = folder.id
    try:
        async with db.begin_nested():
            db.add_all(bookmarks)
            await db.flush()
    except SQLAlchemyError:
        logger.exception(
            "bookmark_save_failed folder_id=%s count=%s", folder_id, len(bookmarks),
        )
        raise BookmarkPersistenceError(folder_id)

    folder.updated_at = func.now()
    await db.flush()
    await db.refresh(folder)


async def delete_bookmarks(
    db: AsyncSession,
    folder: Folder,
    item_ids: Sequence[int],
) -> int:
    """
    Delete the given bookmark entries, but only those that belong to `folder`.

    Returns:
        Number of entries deleted.
    """
    if not item_ids:
        return 0
    result = await db.execute(
        delete(Bookmark).where(
            Bookmark.id.in_(item_ids),
            Bookmark.folder_id == folder.id,
        ),
    )
    if result.rowcount:
        folder.updated_at = func.now()
        await db.flush()
        await db.refresh(folder)
    return result.rowcount
