"""
Test Configuration for JobSeeker

Pytest fixtures: an in-memory SQLite database, a registered user, the job
repository, an in-memory job store and a mock HTTP client factory.
"""

from typing import Callable

import httpx
import pytest
import pytest_asyncio

from jobseeker.core.database import DatabaseManager
from jobseeker.repositories import JobRepository, UserRepository
from tests.fixtures import InMemoryJobStore


@pytest.fixture
def job_store() -> InMemoryJobStore:
    return InMemoryJobStore()


@pytest.fixture
def make_client() -> Callable[[httpx.MockTransport], httpx.AsyncClient]:
    def factory(transport: httpx.MockTransport) -> httpx.AsyncClient:
        # Follows redirects so tests show the fetcher overrides it per request
        return httpx.AsyncClient(transport=transport, follow_redirects=True)
    return factory


@pytest_asyncio.fixture
async def db_manager():
    """In-memory SQLite database with tables created."""
    manager = DatabaseManager("sqlite+aiosqlite:///:memory:")
    await manager.init_database()
    await manager.create_tables()
    yield manager
    await manager.close_connections()


@pytest_asyncio.fixture
async def user(db_manager):
    return await UserRepository(db_manager).get_or_create("jane@example.com", name="Jane Doe")


@pytest_asyncio.fixture
async def job_repository(db_manager) -> JobRepository:
    return JobRepository(db_manager)
