"""Pydantic schemas for folder endpoints."""
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from core.config import get_settings
from models.folder import Visibility
from schemas.validators import parse_identifiers, validate_document_id


class FolderCreate(BaseModel):
    """
    Schema for creating a folder.

    The name is not constrained here: a missing or blank name is reported by the
    folder service as a form error, not a 422.
    """

    name: str | None = None
    visibility: Visibility = Visibility.PRIVATE


class FolderUpdate(BaseModel):
    """Schema for updating a folder. Only fields that are sent are changed."""

    name: str | None = None
    visibility: Visibility | None = None


class FolderBookmarksUpdate(BaseModel):
    """
    Body of PATCH /folders/{id}/bookmarks.

    Send document_ids to add bookmarks or item_ids to remove existing entries.
    """

    document_ids: list[str] | None = Field(
        default=None,
        description="Search document ids to bookmark, comma-delimited or a list",
    )
    item_ids: list[str] | None = Field(
        default=None,
        description="Bookmark entry ids to remove, comma-delimited or a list",
    )
    document_type: str | None = Field(default=None, min_length=1, max_length=100)

    @field_validator("document_ids", "item_ids", mode="before")
    @classmethod
    def split_identifiers(cls, v: object) -> list[str] | None:
        """Accept "1, 2", 1, or [1, "2"]."""
        if v is None:
            return None
        return parse_identifiers(v)

    @field_validator("document_ids")
    @classmethod
    def check_document_ids(cls, v: list[str] | None) -> list[str] | None:
        """Reject identifiers the search index could never resolve."""
        if v is None:
            return None
        return [validate_document_id(document_id) for document_id in v]

    @model_validator(mode="after")
    def check_exactly_one_operation(self) -> "FolderBookmarksUpdate":
        """Exactly one of document_ids/item_ids must be provided."""
        if (self.document_ids is None) == (self.item_ids is None):
            raise ValueError("Provide exactly one of 'document_ids' or 'item_ids'")
        limit = get_settings().max_bookmarks_per_request
        ids = self.document_ids if self.document_ids is not None else self.item_ids
        if len(ids) > limit:
            raise ValueError(f"At most {limit} identifiers may be sent per request")
        return self


class BookmarkResponse(BaseModel):
    """Schema for a bookmark entry inside a folder."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    folder_id: int
    user_id: int
    document_id: str
    document_type: str
    position: int
    created_at: datetime


class FolderResponse(BaseModel):
    """Schema for folder responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    visibility: Visibility
    bookmarks_count: int = 0
    created_at: datetime
    updated_at: datetime


class FolderDetailResponse(FolderResponse):
    """Folder with its bookmarks, in position order."""

    bookmarks: list[BookmarkResponse] = Field(default_factory=list)


class FolderDraft(BaseModel):
    """
    Unsaved folder state shown in a form.

    For a new folder id and user_id are None. After a failed submission the
    draft carries the rejected values so the client can show them again.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    user_id: int | None = None
    name: str | None = None
    visibility: Visibility = Visibility.PRIVATE


class FolderFormResponse(BaseModel):
    """A folder form to present: blank, for editing, or re-presented with errors."""

    template: Literal["new", "edit"]
    folder: FolderDraft
    errors: list[str] = Field(default_factory=list)
