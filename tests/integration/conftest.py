"""
Shared fixtures for integration tests.

Postgres-backed tests skip when the configured database is unreachable.
"""

from collections.abc import AsyncGenerator

import psycopg
import pytest
from psycopg_pool import AsyncConnectionPool

from src.adapters.repository.postgres import PostgresAccountRepository, run_migrations
from src.config.settings import get_settings


@pytest.fixture
async def pool() -> AsyncGenerator[AsyncConnectionPool, None]:
    """Open a pool against the configured database, or skip."""
    settings = get_settings()
    try:
        await (await psycopg.AsyncConnection.connect(settings.database_url, connect_timeout=2)).close()
    except psycopg.OperationalError as e:
        pytest.skip(f"PostgreSQL not available: {e}")

    pool = AsyncConnectionPool(conninfo=settings.database_url, min_size=1, max_size=10, open=False)
    await pool.open()
    await run_migrations(pool)
    async with pool.connection() as conn:
        await conn.execute("DELETE FROM accounts")
    yield pool
    await pool.close()


@pytest.fixture
def postgres_repository(pool: AsyncConnectionPool) -> PostgresAccountRepository:
    return PostgresAccountRepository(pool)
