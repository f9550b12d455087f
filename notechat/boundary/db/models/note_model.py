"""
Note ORM model.

Notes are authored elsewhere; this service only reads them to build the
retrieval index and to label citations.

Dependencies: sqlalchemy, notechat.boundary.db.base
System role: Source documents for indexing
"""

import uuid

from sqlalchemy import String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from notechat.boundary.db.base import Base, TimestampMixin, UUIDMixin


class NoteModel(Base, UUIDMixin, TimestampMixin):
    """
    Note ORM model.

    Attributes:
        id: UUID primary key
        owner_id: Owning user; every retrieval query is scoped by it
        title: Optional display title used in citations
        content: Raw rich-text (HTML) body
    """

    __tablename__ = "notes"

    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    title: Mapped[str | None] = mapped_column(String(500), nullable=True, default=None)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
