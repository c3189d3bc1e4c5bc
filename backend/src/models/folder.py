"""Folder model for named, owned collections of bookmarked documents."""
from enum import StrEnum

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, TimestampMixin

# Width of folders.name; MAX_FOLDER_NAME_LENGTH may lower the limit, not raise it
NAME_COLUMN_LENGTH = 100


class Visibility(StrEnum):
    """Who may view a folder."""

    PUBLIC = "public"
    PRIVATE = "private"


class Folder(Base, TimestampMixin):
    """
    Folder model - a user's collection of bookmarked search results.

    Bookmarks reference their folder through Bookmark.folder_id. There is no ORM
    relationship here: membership is queried explicitly and the folder service
    deletes a folder's bookmarks itself when the folder is destroyed.
    """

    __tablename__ = "folders"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        comment="Owner - the user who created the folder",
    )
    name: Mapped[str] = mapped_column(String(NAME_COLUMN_LENGTH), nullable=False)
    visibility: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default=Visibility.PRIVATE.value,
        server_default=Visibility.PRIVATE.value,
        index=True,
    )
