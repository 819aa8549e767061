"""
Test Configuration and Fixtures

Provides the async API test client and common employee fixtures.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from backend.config import Settings, get_settings
from backend.main import app
from engines.schemas.employee import Employee
from tests.factories import make_employee, make_salary_employee


@pytest_asyncio.fixture(scope="function")
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Provide an async test client with federal-baseline settings."""

    def override_get_settings() -> Settings:
        return Settings(_env_file=None)

    app.dependency_overrides[get_settings] = override_get_settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def hourly_employee() -> Employee:
    """$10.00/hr hourly employee."""
    return make_employee(id="hourly-1", name="Hourly Harry", hourly_rate=1000)


@pytest.fixture
def salary_employee() -> Employee:
    """$700/week salaried manager."""
    return make_salary_employee()
