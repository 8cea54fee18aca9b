"""Pytest fixtures for schema tests.

Creates the schema in a throwaway SQLite database and reflects it, so the
conventions are checked against DDL the store actually emits.
"""

import pytest_asyncio
from sqlalchemy import MetaData

from infrastructure.storage import SqlRecordStore


@pytest_asyncio.fixture
async def reflected_metadata(tmp_path, settings) -> MetaData:
    store = SqlRecordStore.from_url(f"sqlite+aiosqlite:///{tmp_path / 'schema.db'}", settings)
    await store.create_schema()
    metadata = MetaData()
    async with store.engine.connect() as conn:
        await conn.run_sync(metadata.reflect)
    await store.close()
    return metadata
