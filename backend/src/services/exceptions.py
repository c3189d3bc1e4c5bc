"""Shared exceptions for service layer operations."""


class AuthenticationRequiredError(Exception):
    """
    Raised when an action needs a signed-in user and the request has none.

    The API turns this into a redirect to the sign-in location rather than an
    error body, so anonymous callers learn nothing about the requested folder.
    """

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class FolderValidationError(Exception):
    """
    Raised when folder input fails validation (e.g. a blank name).

    Nothing is persisted or mutated when this is raised.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors))


class BookmarkPersistenceError(Exception):
    """
    Raised when a batch of bookmarks could not be saved.

    The whole batch is rolled back; none of the entries are committed.
    """

    def __init__(self, folder_id: int, message: str = "Unable to save bookmarks.") -> None:
        self.folder_id = folder_id
        super().__init__(message)
