import os
from collections.abc import AsyncGenerator

import pytest

from reportflow.config.settings import Settings
from reportflow.storage.connection import create_pool
from reportflow.storage.postgres_store import PostgresRecordStore


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "reportflow_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture
async def pg_store(test_settings: Settings) -> AsyncGenerator[PostgresRecordStore, None]:
    pool = create_pool(test_settings)
    store = PostgresRecordStore(pool)
    try:
        await pool.open(wait=True, timeout=5)
        await store.ensure_schema()
    except Exception as e:
        await pool.close()
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. "
            "Set DB_* env to point at a disposable database"
        )
    try:
        yield store
    finally:
        await store.close()


@pytest.fixture
async def report_cleanup(pg_store: PostgresRecordStore) -> AsyncGenerator[list[str], None]:
    cleanup: list[str] = []
    yield cleanup
    if not cleanup:
        return
    async with pg_store._pool.connection() as conn:
        await conn.execute("DELETE FROM reports WHERE id = ANY(%s::uuid[])", (cleanup,))
        await conn.commit()
