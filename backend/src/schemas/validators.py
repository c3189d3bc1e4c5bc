"""
Shared validation functions for Pydantic schemas.

Identifier lists arrive from search result pages either as a comma-delimited
string ("123, 456") or as a JSON list, so both shapes are accepted everywhere.
"""
from collections.abc import Iterable

# Longest document identifier the search index hands out (matches the column size)
MAX_DOCUMENT_ID_LENGTH = 255


def parse_identifiers(value: str | int | Iterable[str | int] | None) -> list[str]:
    """
    Split a delimited string or list of identifiers into a clean list.

    Args:
        value: "123, 456", 123, ["123", "456"], or None.

    Returns:
        Identifiers with surrounding whitespace stripped and empty entries
        dropped. Order and duplicates are preserved.
    """
    if value is None:
        return []
    if isinstance(value, str | int):
        raw = str(value).split(",")
    else:
        raw = []
        for item in value:
            raw.extend(str(item).split(","))
    return [part.strip() for part in raw if part.strip()]


def validate_document_id(document_id: str) -> str:
    """
    Check that a document identifier can be stored and resolved.

    Raises:
        ValueError: If the identifier is empty or too long.
    """
    if not document_id:
        raise ValueError("Document id cannot be empty")
    if len(document_id) > MAX_DOCUMENT_ID_LENGTH:
        raise ValueError(
            f"Document id exceeds maximum length of {MAX_DOCUMENT_ID_LENGTH} characters",
        )
    return document_id
