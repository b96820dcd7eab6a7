"""API test fixtures: in-memory database, catalog and ASGI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - db_manager patched at module level, restored afterwards
    - app.state gets the catalog/registry that lifespan would have built
"""

import pytest
from httpx import ASGITransport, AsyncClient

import typegate.infrastructure.database as db_module
from typegate.infrastructure.database import DatabaseSessionManager
from typegate.main import app
from typegate.services.field_types import FieldTypeRegistry
from typegate.services.type_catalog import TypeCatalog

TYPES = {
    "person": {
        "fields": {
            "name": {"title": "Name", "type": "text", "required": True},
            "email": {"title": "Email", "type": "email"},
        },
    },
    "content": {
        "polymorphic": True,
        "subtypes": {
            "article": {"fields": {"title": {"title": "Title", "type": "string"}}},
        },
    },
    "address": {
        "standalone": False,
        "fields": {"street": {"title": "Street", "type": "text", "required": True}},
    },
}


@pytest.fixture
async def test_manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    await manager.create_all()
    yield manager
    await manager.dispose()


@pytest.fixture
async def client(test_manager):
    original_manager = db_module.db_manager
    db_module.db_manager = test_manager
    app.state.catalog = TypeCatalog.from_mapping(TYPES)
    app.state.field_types = FieldTypeRegistry()

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    db_module.db_manager = original_manager
