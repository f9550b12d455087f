"""
Note embedding ORM model.

Dense vector for a chunk, stored as a JSON float list so the same schema
works on PostgreSQL and SQLite. A chunk without a row here is still
searchable lexically.

Dependencies: sqlalchemy, notechat.boundary.db.base
System role: Dense retrieval storage
"""

import uuid

from sqlalchemy import JSON, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from notechat.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class NoteEmbeddingModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Note embedding ORM model.

    Attributes:
        chunk_id: Embedded chunk (UNIQUE, one vector per chunk)
        embedding: Vector components
        model: Identifier of the model that produced the vector
    """

    __tablename__ = "note_embeddings"

    chunk_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("note_chunks.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    embedding: Mapped[list] = mapped_column(JSON, nullable=False)
    model: Mapped[str] = mapped_column(String(255), nullable=False)
