"""Service layer for adding documents to and removing entries from a folder."""
import logging
from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from core.config import get_settings
from models.bookmark import Bookmark
from models.folder import Folder
from schemas.validators import parse_identifiers
from services import folder_service

logger = logging.getLogger(__name__)


def parse_item_ids(item_ids: str | int | Iterable[str | int] | None) -> list[int]:
    """
    Parse bookmark entry ids, dropping anything that is not an integer.

    Such values can never match an entry, so they are skipped like any other
    id that does not belong to the folder.
    """
    parsed = []
    for value in parse_identifiers(item_ids):
        try:
            parsed.append(int(value))
        except ValueError:
            logger.debug("bookmark_item_id_skipped value=%r", value)
    return parsed


async def add_bookmarks(
    db: AsyncSession,
    folder: Folder,
    actor_user_id: int,
    document_ids: str | Iterable[str],
    document_type: str | None = None,
) -> Folder:
    """
    Bookmark documents into a folder.

    One entry is created per identifier, in the order given and after any
    existing entries. Repeated identifiers produce repeated entries.

    Args:
        db: Database session.
        folder: Target folder. The caller has already authorized the actor.
        actor_user_id: User recorded as having added the bookmarks.
        document_ids: "123, 456" or a list of identifiers.
        document_type: Source type of the documents. Defaults to the configured type.

    Returns:
        The folder.

    Raises:
        BookmarkPersistenceError: If the batch could not be saved. No entry from
            the batch is kept.
    """
    ids = parse_identifiers(document_ids)
    document_type = document_type or get_settings().default_document_type

    start = await folder_service.get_max_position(db, folder.id)
    bookmarks = [
        Bookmark(
            folder_id=folder.id,
            user_id=actor_user_id,
            document_id=document_id,
            document_type=document_type,
            position=start + offset,
        )
        for offset, document_id in enumerate(ids, start=1)
    ]
    if not bookmarks:
        return folder

    await folder_service.save_bookmarks(db, folder, bookmarks)
    logger.info(
        "bookmarks_added folder_id=%s user_id=%s count=%s",
        folder.id,
        actor_user_id,
        len(bookmarks),
    )
    return folder


async def remove_bookmarks(
    db: AsyncSession,
    folder: Folder,
    actor_user_id: int,
    item_ids: str | int | Iterable[str | int],
) -> Folder:
    """
    Remove bookmark entries from a folder.

    Only entries belonging to `folder` are removed. Ids of entries in other
    folders, or of entries that no longer exist, are ignored, so repeating a
    removal is harmless.

    Args:
        db: Database session.
        folder: Target folder. The caller has already authorized the actor.
        actor_user_id: User performing the removal.
        item_ids: Bookmark entry ids (not document ids).

    Returns:
        The folder.
    """
    ids = parse_item_ids(item_ids)
    removed = await folder_service.delete_bookmarks(db, folder, ids)
    skipped = len(set(ids)) - removed
    logger.info(
        "bookmarks_removed folder_id=%s user_id=%s count=%s skipped=%s",
        folder.id,
        actor_user_id,
        removed,
        skipped,
    )
    return folder
