"""Tests for the health check endpoint."""
from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

from httpx import AsyncClient
from sqlalchemy.exc import OperationalError


async def test_health_endpoint_reports_healthy(anonymous_client: AsyncClient) -> None:
    """Health needs no sign-in and checks the database."""
    response = await anonymous_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "database": "healthy"}


async def test_health_endpoint_reports_unreachable_database(
    anonymous_client: AsyncClient,
) -> None:
    from api.main import app
    from db.session import get_async_session

    broken_session = AsyncMock()
    broken_session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("down"))

    async def override_get_async_session() -> AsyncGenerator[AsyncMock]:
        yield broken_session

    app.dependency_overrides[get_async_session] = override_get_async_session

    response = await anonymous_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "degraded", "database": "unhealthy"}
