"""
Shared test fixtures and configuration for entire test suite.

Provides: SQLite (aiosqlite) engine and session factory, mock providers,
settings, and factories for notes, threads, and indexed chunks.
Dependencies: pytest, sqlalchemy, notechat
System role: Test infrastructure and fixture management
"""

import uuid

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from notechat.boundary.db.connection import create_session_factory, create_tables
from notechat.boundary.db.CRUD.note_crud import note_crud
from notechat.boundary.db.CRUD.thread_crud import thread_crud
from notechat.configs import ChatSettings, IndexingSettings, RetrievalSettings
from notechat.core.embeddings.mock_provider import MockEmbeddingProvider
from notechat.core.indexing.chunker import TextChunker
from notechat.core.indexing.index_writer import IndexWriter
from notechat.core.llm.mock_provider import MockCompletionProvider

TEST_DIMENSION = 16


@pytest.fixture
async def engine(tmp_path):
    """
    File-backed SQLite engine with every table created.

    A file (not :memory:) lets each session open its own connection while
    seeing the same data, like concurrent sessions against PostgreSQL.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'notechat.db'}")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    """Session factory bound to the test engine."""
    return create_session_factory(engine)


@pytest.fixture
async def db_session(session_factory):
    """
    Create a test database session.

    Yields:
        AsyncSession: Session closed after the test
    """
    async with session_factory() as session:
        yield session


@pytest.fixture
def owner_id() -> uuid.UUID:
    """Generate a test owner ID."""
    return uuid.uuid4()


@pytest.fixture
def other_owner_id() -> uuid.UUID:
    """Generate a second owner ID for scoping tests."""
    return uuid.uuid4()


@pytest.fixture
def embedding_provider() -> MockEmbeddingProvider:
    """Deterministic embedding provider with a small dimension."""
    return MockEmbeddingProvider(dimension=TEST_DIMENSION)


@pytest.fixture
def completion_provider() -> MockCompletionProvider:
    """Echoing completion provider."""
    return MockCompletionProvider()


@pytest.fixture
def retrieval_settings() -> RetrievalSettings:
    """Retrieval settings with documented defaults."""
    return RetrievalSettings()


@pytest.fixture
def indexing_settings() -> IndexingSettings:
    """Indexing settings without the inter-batch pause."""
    return IndexingSettings(batch_size=2, batch_delay_seconds=0.0)


@pytest.fixture
def chat_settings() -> ChatSettings:
    """Chat settings with documented defaults."""
    return ChatSettings()


@pytest.fixture
def chunker() -> TextChunker:
    """Default chunker."""
    return TextChunker()


@pytest.fixture
def index_writer() -> IndexWriter:
    """Index writer."""
    return IndexWriter()


@pytest.fixture
def make_note(session_factory):
    """
    Factory inserting a committed note.

    Returns:
        Callable: async (owner_id, content, title=None) -> NoteModel
    """

    async def _make(owner_id: uuid.UUID, content: str, title: str | None = None):
        async with session_factory() as session:
            note = await note_crud.create(session, owner_id=owner_id, title=title, content=content)
            await session.commit()
            return note

    return _make


@pytest.fixture
def make_thread(session_factory):
    """
    Factory inserting a committed thread.

    Returns:
        Callable: async (owner_id, title=None) -> ThreadModel
    """

    async def _make(owner_id: uuid.UUID, title: str | None = None):
        async with session_factory() as session:
            thread = await thread_crud.create(session, owner_id=owner_id, title=title)
            await session.commit()
            return thread

    return _make


@pytest.fixture
def index_chunks(session_factory, index_writer, embedding_provider):
    """
    Factory writing chunks (and optionally embeddings) for a note.

    Returns:
        Callable: async (note, texts, embed=True) -> list[NoteChunkModel]
    """

    async def _index(note, texts: list[str], embed: bool = True):
        async with session_factory() as session:
            rows = await index_writer.replace_chunks(
                session, note.id, note.owner_id, texts, content_hash=f"hash-{note.id}"
            )
            if embed:
                vectors = await embedding_provider.embed_batch(texts)
                await index_writer.attach_embeddings(
                    session,
                    rows,
                    vectors,
                    model_id=embedding_provider.model_id,
                    dimension=embedding_provider.dimension,
                )
            return rows

    return _index
