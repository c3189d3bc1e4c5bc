"""User model: the folder owner, keyed by the Auth0 subject."""
from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from models.api_token import ApiToken


class User(Base, TimestampMixin):
    """
    A signed-in user.

    Rows are created on first authenticated request. Folders point back here
    through Folder.user_id and are removed by the database when the user is.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    auth0_id: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        comment="Auth0 'sub' claim; dev mode uses a fixed placeholder subject",
    )
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Deleting a user through the ORM also deletes its tokens.
    api_tokens: Mapped[list["ApiToken"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
    )
