"""
Citation domain model.

Snapshot of a context passage shown to the user. Stored denormalized in
the assistant message, so it stays valid after the note changes.

Dependencies: pydantic
System role: Citation data structure
"""

import uuid

from pydantic import BaseModel, Field


class Citation(BaseModel):
    """Citation model for source attribution."""

    note_id: uuid.UUID = Field(description="Source note")
    chunk_id: uuid.UUID = Field(description="Chunk identifier for tracing")
    title: str = Field(description="Note title or 'Note <id>' fallback")
    text: str = Field(description="Passage text, truncated")
    chunk_index: int = Field(description="Position of the chunk within the note")
