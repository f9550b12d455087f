"""
Note indexing schemas.

Dependencies: pydantic
System role: Ingestion API contracts and results
"""

import uuid
from enum import Enum

from pydantic import BaseModel, Field


class IngestionStatus(str, Enum):
    """
    Outcome of indexing one note.

    INDEXED: Chunks and embeddings written
    UNCHANGED: Fingerprint matched, nothing written
    EMPTY: Note has no indexable text; previous chunks removed
    EMBEDDING_FAILED: Chunks written, vectors missing (lexical only until backfill)
    FAILED: Nothing indexed (note missing or storage error)
    """

    INDEXED = "indexed"
    UNCHANGED = "unchanged"
    EMPTY = "empty"
    EMBEDDING_FAILED = "embedding_failed"
    FAILED = "failed"


class IngestionResult(BaseModel):
    """Per-note ingestion report."""

    note_id: uuid.UUID
    status: IngestionStatus
    chunk_count: int = 0
    embedded_count: int = 0
    error: str | None = None


class NoteChangedRequest(BaseModel):
    """Change notification for a single note."""

    owner_id: uuid.UUID


class ReindexRequest(BaseModel):
    """Batch re-index request. All notes of the owner when note_ids is omitted."""

    owner_id: uuid.UUID
    note_ids: list[uuid.UUID] | None = None


class BackfillRequest(BaseModel):
    """Embedding backfill request."""

    owner_id: uuid.UUID
    limit: int | None = Field(default=None, gt=0)


class BackfillResult(BaseModel):
    """Embedding backfill report."""

    owner_id: uuid.UUID
    pending: int
    embedded: int


class ChunkResponse(BaseModel):
    """Indexed chunk as exposed by the API."""

    id: uuid.UUID
    chunk_index: int
    text: str
    token_count: int
    content_hash: str
    has_embedding: bool
