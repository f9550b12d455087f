"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - create_engine_from_settings(), create_session_factory(), create_tables(): Async connection management
  - NoteModel, NoteChunkModel, NoteEmbeddingModel, ThreadModel, MessageModel: Domain entities

Dependencies: sqlalchemy, notechat.configs
System role: Database adapter for notes, the retrieval index, and conversations
"""

from notechat.boundary.db.base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin
from notechat.boundary.db.connection import (
    create_engine_from_settings,
    create_session_factory,
    create_tables,
)
from notechat.boundary.db.models import (
    MessageModel,
    MessageRole,
    MessageStatus,
    NoteChunkModel,
    NoteEmbeddingModel,
    NoteModel,
    ThreadModel,
)

__all__ = [
    "Base",
    "CreatedAtMixin",
    "TimestampMixin",
    "UUIDMixin",
    "create_engine_from_settings",
    "create_session_factory",
    "create_tables",
    "MessageModel",
    "MessageRole",
    "MessageStatus",
    "NoteChunkModel",
    "NoteEmbeddingModel",
    "NoteModel",
    "ThreadModel",
]
