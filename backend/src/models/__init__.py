"""SQLAlchemy models."""
from models.api_token import ApiToken
from models.base import Base, TimestampMixin
from models.bookmark import Bookmark
from models.folder import Folder, Visibility
from models.user import User

__all__ = [
    "ApiToken",
    "Base",
    "Bookmark",
    "Folder",
    "TimestampMixin",
    "User",
    "Visibility",
]
