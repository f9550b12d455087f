"""
Thread request/response schemas.

Dependencies: pydantic
System role: Thread API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreateThreadRequest(BaseModel):
    """Request schema for creating a thread."""

    owner_id: uuid.UUID
    title: str | None = Field(default=None, max_length=255)


class UpdateThreadRequest(BaseModel):
    """Request schema for renaming a thread."""

    title: str | None = Field(default=None, max_length=255)


class ThreadResponse(BaseModel):
    """Response schema for thread operations."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    owner_id: uuid.UUID
    title: str | None
    created_at: datetime
    updated_at: datetime
