"""Shared fixtures for API tests."""
from collections.abc import Awaitable, Callable

import pytest

from models.folder import Folder, Visibility
from models.user import User


@pytest.fixture
async def my_private_folder(
    make_folder: Callable[..., Awaitable[Folder]],
    user: User,
) -> Folder:
    """A private folder owned by the signed-in user."""
    return await make_folder(user, name="My Private Folder", visibility=Visibility.PRIVATE)


@pytest.fixture
async def my_public_folder(
    make_folder: Callable[..., Awaitable[Folder]],
    user: User,
) -> Folder:
    """A public folder owned by the signed-in user."""
    return await make_folder(user, name="My Public Folder", visibility=Visibility.PUBLIC)


@pytest.fixture
async def others_private_folder(
    make_folder: Callable[..., Awaitable[Folder]],
    other_user: User,
) -> Folder:
    """A private folder owned by another user."""
    return await make_folder(other_user, name="Their Private Folder")


@pytest.fixture
async def others_public_folder(
    make_folder: Callable[..., Awaitable[Folder]],
    other_user: User,
) -> Folder:
    """A public folder owned by another user."""
    return await make_folder(
        other_user, name="Their Public Folder", visibility=Visibility.PUBLIC,
    )
