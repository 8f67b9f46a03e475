"""Integration test fixtures: the API served over the test database."""

from collections.abc import AsyncGenerator
from uuid import UUID

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from hr_reporting.api.app import create_app
from hr_reporting.api.dependencies import get_clock, get_db_session


@pytest.fixture
def app(session_factory, clock):
    """Application wired to the test database and fixed clock."""
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
    app.dependency_overrides[get_clock] = lambda: clock
    return app


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def headers_for(user_id: UUID, role: str = "employee") -> dict[str, str]:
    """Identity headers of a caller."""
    return {"X-User-ID": str(user_id), "X-User-Role": role}


@pytest.fixture
def as_user():
    """Build identity headers for a caller."""
    return headers_for


@pytest_asyncio.fixture
async def staff(session, make_employee):
    """Committed directory: one admin and two employees."""
    admin = await make_employee(name="Root", role="admin", department=None)
    alice = await make_employee(name="Alice", department="Engineering")
    bob = await make_employee(name="Bob", department="Sales", base_salary="3000.00")
    await session.commit()
    return {"admin": admin, "alice": alice, "bob": bob}
