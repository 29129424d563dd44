"""PostgreSQL integration fixtures.

Most fixtures are inherited from tests/conftest.py. Here the SQLite URL is
replaced by a PostgreSQL container, so the same container, app and client
fixtures run against the production driver (asyncpg).
"""
import asyncio

import docker
import pytest
import pytest_asyncio
from docker.errors import DockerException
from testcontainers.postgres import PostgresContainer

from src.shared.database.database import Database, DatabaseSettings


@pytest.fixture(scope="module")
def postgres_container():
    """Start a PostgreSQL container for testing. Module-scoped for reuse."""
    try:
        docker.from_env().ping()
    except DockerException as e:
        pytest.skip(f"Docker is not available: {e}")

    with PostgresContainer("postgres:16-alpine") as postgres:
        yield postgres


@pytest.fixture
def async_db_url(postgres_container):
    """Async database URL for the postgres container."""
    connection_url = postgres_container.get_connection_url()
    return connection_url.replace("postgresql+psycopg2://", "postgresql+asyncpg://")


@pytest_asyncio.fixture
async def db(async_db_url):
    """Database bound to the container, once it accepts connections."""
    db = Database(DatabaseSettings(db_url=async_db_url))
    await wait_till_db_ready(db)
    yield db
    await db.dispose()


# The container reports ready slightly before its port accepts connections
async def wait_till_db_ready(db: Database, max_attempts: int = 20):
    for attempt in range(max_attempts):
        try:
            async with db._engine.begin():
                return
        except Exception:
            await asyncio.sleep(0.25)
    raise RuntimeError(f"Database not ready after {max_attempts} attempts")
