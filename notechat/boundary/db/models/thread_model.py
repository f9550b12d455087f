"""
Thread ORM model.

A conversation container. updated_at doubles as "last activity" and is
bumped after every persisted turn.

Dependencies: sqlalchemy, notechat.boundary.db.base
System role: Conversation persistence
"""

import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from notechat.boundary.db.base import Base, TimestampMixin, UUIDMixin


class ThreadModel(Base, UUIDMixin, TimestampMixin):
    """
    Thread ORM model.

    Attributes:
        owner_id: Owning user
        title: Optional display title
    """

    __tablename__ = "threads"

    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)
