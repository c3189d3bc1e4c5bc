"""Bookmark model for documents saved into a folder."""
from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, TimestampMixin


class Bookmark(Base, TimestampMixin):
    """
    Bookmark model - one document reference inside exactly one folder.

    The same document may be bookmarked more than once in a folder; entries are
    told apart by id and ordered by position.
    """

    __tablename__ = "folder_bookmarks"

    id: Mapped[int] = mapped_column(primary_key=True)
    folder_id: Mapped[int] = mapped_column(
        ForeignKey("folders.id", ondelete="CASCADE"),
        index=True,
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        comment="User who added the bookmark",
    )
    document_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Identifier of the document in the search index",
    )
    document_type: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Source/type of the document, e.g. 'SolrDocument'",
    )
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="1-based order of the entry within its folder",
    )
