"""
Note chunk ORM model.

One row per passage of a note snapshot. All chunks of a snapshot share the
content hash of the text they were cut from; a changed hash replaces the
whole set.

Dependencies: sqlalchemy, notechat.boundary.db.base
System role: Retrieval unit storage (lexical search corpus)
"""

import uuid

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from notechat.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class NoteChunkModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Note chunk ORM model.

    Attributes:
        note_id: Parent note
        owner_id: Denormalized owner for scoped search
        chunk_index: 0-based position within the note snapshot
        text: Passage text
        token_count: ceil(len(text) / 4)
        content_hash: SHA-256 of the normalized note text

    Constraints:
        (note_id, chunk_index): UNIQUE
    """

    __tablename__ = "note_chunks"
    __table_args__ = (UniqueConstraint("note_id", "chunk_index", name="uq_note_chunks_note_index"),)

    note_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("notes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    token_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    content_hash: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
