"""
Authorization rules for folders.

Every decision goes through `can()`, a side-effect free lookup over who is
asking (anonymous, owner, or someone else) and what they want to do. Nothing
here touches the database or the request, so the rules can be tested on plain
objects.

    | action                     | anonymous | other user | owner |
    |----------------------------|-----------|------------|-------|
    | view                       | if public | if public  | yes   |
    | edit, destroy,             | no        | no         | yes   |
    | add/remove_bookmarks       |           |            |       |
    | create, list (no folder)   | no        | yes        | yes   |
"""
from enum import StrEnum
from typing import Protocol

from sqlalchemy import ColumnElement, or_

from models.folder import Folder, Visibility


class FolderAction(StrEnum):
    """Actions a user can attempt on folders."""

    VIEW = "view"
    EDIT = "edit"
    DESTROY = "destroy"
    CREATE = "create"
    ADD_BOOKMARKS = "add_bookmarks"
    REMOVE_BOOKMARKS = "remove_bookmarks"
    LIST = "list"


# Actions that change a folder or its membership; owner only
MUTATING_ACTIONS = frozenset({
    FolderAction.EDIT,
    FolderAction.DESTROY,
    FolderAction.ADD_BOOKMARKS,
    FolderAction.REMOVE_BOOKMARKS,
})

# Actions that are not about one existing folder
COLLECTION_ACTIONS = frozenset({FolderAction.CREATE, FolderAction.LIST})


class Actor(Protocol):
    """Anything with a user id (the ORM User, or a test double)."""

    id: int


class OwnedFolder(Protocol):
    """The folder attributes the policy reads."""

    user_id: int
    visibility: str


def can(user: Actor | None, folder: OwnedFolder | None, action: FolderAction) -> bool:
    """
    Decide whether `user` may perform `action` on `folder`.

    Args:
        user: The acting user, or None for an anonymous request.
        folder: The target folder. None for create/list, which do not target one.
        action: What the user is trying to do.

    Returns:
        True if allowed.
    """
    if action in COLLECTION_ACTIONS:
        return user is not None

    if folder is None:
        return False

    is_owner = user is not None and user.id == folder.user_id
    if is_owner:
        return True

    if action == FolderAction.VIEW:
        return folder.visibility == Visibility.PUBLIC

    return False


def visible_to(user_id: int | None) -> ColumnElement[bool]:
    """
    SQL predicate for the folders a user may view: their own plus all public ones.

    Mirrors the VIEW rule of `can()` for list queries.
    """
    is_public = Folder.visibility == Visibility.PUBLIC.value
    if user_id is None:
        return is_public
    return or_(Folder.user_id == user_id, is_public)
