"""
Chat domain models and schemas.

Dependencies: pydantic
System role: Chat turn and message history contracts
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChatTurnRequest(BaseModel):
    """One user turn addressed to a thread."""

    thread_id: uuid.UUID
    owner_id: uuid.UUID
    message: str
    request_id: str = Field(default_factory=lambda: uuid.uuid4().hex)


class ChatMessageResponse(BaseModel):
    """A stored message."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    role: str
    content: dict[str, Any]
    token_count: int
    status: str
    created_at: datetime


class ChatHistoryResponse(BaseModel):
    """A page of messages with the thread's total count."""

    messages: list[ChatMessageResponse]
    total: int


class CancelResponse(BaseModel):
    """Result of a cancel request."""

    request_id: str
    cancelled: bool
