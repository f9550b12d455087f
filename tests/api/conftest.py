"""
API test fixtures.

Provides: application wired to a temporary SQLite database and mock
providers, a TestClient that runs the lifespan, and a note seeder that
writes through the application's own session factory.
Dependencies: fastapi.testclient, notechat.main
System role: HTTP/WebSocket test infrastructure
"""

import uuid

import pytest
from fastapi.testclient import TestClient

from notechat.boundary.db.CRUD.note_crud import note_crud
from notechat.configs import Settings
from notechat.configs.database import DatabaseSettings
from notechat.configs.indexing import IndexingSettings
from notechat.configs.providers import ProviderSettings
from notechat.main import create_app


@pytest.fixture
def api_settings(tmp_path) -> Settings:
    """Settings for an isolated application instance."""
    return Settings(
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}", create_tables=True),
        providers=ProviderSettings(provider="mock", embedding_dimension=16),
        indexing=IndexingSettings(batch_delay_seconds=0.0),
    )


@pytest.fixture
def client(api_settings):
    """
    TestClient with startup and shutdown run.

    Yields:
        TestClient: Client bound to a fresh application
    """
    app = create_app(api_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seed_note(client):
    """
    Insert a committed note on the application's event loop.

    Returns:
        Callable: (owner_id, content, title=None) -> UUID
    """

    def _seed(owner_id: uuid.UUID, content: str, title: str | None = None) -> uuid.UUID:
        session_factory = client.app.state.container.session_factory

        async def _insert() -> uuid.UUID:
            async with session_factory() as session:
                note = await note_crud.create(session, owner_id=owner_id, title=title, content=content)
                await session.commit()
                return note.id

        return client.portal.call(_insert)

    return _seed
