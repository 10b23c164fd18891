"""Integration test fixtures: the API app wired to the in-memory test database."""

from collections.abc import AsyncGenerator
from uuid import UUID

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from symbifi.api.app import create_app
from symbifi.api.dependencies import get_db_session
from symbifi.services import RecordService
from tests.factories import TENANT_A, TENANT_B

TENANT_A_ID = UUID(TENANT_A)
TENANT_B_ID = UUID(TENANT_B)


def tenant_headers(tenant_id: UUID | str = TENANT_A) -> dict[str, str]:
    return {"X-Tenant-ID": str(tenant_id)}


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    app = create_app()

    async def override_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def admin_id(session_factory) -> UUID:
    """Grant the admin role to tenant B's user."""
    async with session_factory() as session:
        await RecordService(session).grant_role(TENANT_B_ID, "admin")
        await session.commit()
    return TENANT_B_ID
