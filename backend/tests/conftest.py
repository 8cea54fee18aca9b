"""Pytest fixtures for storage testing.

Provides reusable test fixtures for:
- Record stores for both backends (in-memory and SQLite through SQLAlchemy)
- A Storage bundle of every repository over that record store
- Two tenants, so every test can check isolation between them

Entity builders live in fixtures/entities.py.

Usage:
    @pytest.mark.asyncio
    async def test_something(storage, tenant_a):
        customer = await make_customer(storage, tenant_a)
"""

import sys
from pathlib import Path

import pytest
import pytest_asyncio

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

from config import Settings
from fixtures.settings import make_settings
from infrastructure.storage import MemoryRecordStore, SqlRecordStore
from storage import Storage


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest_asyncio.fixture(params=["memory", "sql"])
async def record_store(request, tmp_path, settings):
    """A fresh, empty record store for each backend."""
    if request.param == "memory":
        store = MemoryRecordStore()
    else:
        store = SqlRecordStore.from_url(f"sqlite+aiosqlite:///{tmp_path / 'bizops-test.db'}", settings)
    await store.create_schema()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def storage(record_store, settings) -> Storage:
    return Storage(record_store, settings)


@pytest_asyncio.fixture
async def tenant_a(storage):
    return await storage.tenants.create({"name": "Acme Kitchens", "subdomain": "acme"})


@pytest_asyncio.fixture
async def tenant_b(storage):
    return await storage.tenants.create({"name": "Birch Interiors", "subdomain": "birch"})

