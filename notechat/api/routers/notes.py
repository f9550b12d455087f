"""
Note indexing API endpoints.

Routes:
- POST /notes/{id}/changed - Re-index one note after an edit
- POST /notes/reindex - Re-index a set of notes (or all of an owner's notes)
- POST /notes/embeddings/backfill - Embed chunks missing vectors
- GET /notes/{id}/chunks - Inspect a note's indexed chunks

Dependencies: notechat.application.services.ingestion_service
System role: Ingestion HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from notechat.api.deps import get_db, get_ingestion_service
from notechat.application.services.ingestion_service import IngestionService
from notechat.boundary.db.CRUD.note_chunk_crud import note_chunk_crud
from notechat.boundary.db.CRUD.note_crud import note_crud
from notechat.boundary.db.CRUD.note_embedding_crud import note_embedding_crud
from notechat.core.exceptions import NoteNotFoundError, StorageError
from notechat.models.note import (
    BackfillRequest,
    BackfillResult,
    ChunkResponse,
    IngestionResult,
    NoteChangedRequest,
    ReindexRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["notes"])


@router.post("/reindex", response_model=list[IngestionResult])
async def reindex_notes(
    request: ReindexRequest,
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> list[IngestionResult]:
    """Re-index the listed notes, or every note of the owner when none are listed."""
    if request.note_ids is None:
        return await ingestion_service.reindex_owner(request.owner_id)
    return await ingestion_service.ingest_batch(request.note_ids, request.owner_id)


@router.post("/embeddings/backfill", response_model=BackfillResult)
async def backfill_embeddings(
    request: BackfillRequest,
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> BackfillResult:
    """Embed chunks stored without vectors."""
    return await ingestion_service.backfill_embeddings(request.owner_id, limit=request.limit)


@router.post("/{note_id}/changed", response_model=IngestionResult)
async def note_changed(
    note_id: UUID,
    request: NoteChangedRequest,
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> IngestionResult:
    """
    Index a note after it was edited. A no-op when its text is unchanged.

    Raises:
        HTTPException(404): Note not found for owner
        HTTPException(500): Chunk storage failed
    """
    try:
        return await ingestion_service.ingest_note(note_id, request.owner_id)
    except NoteNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except StorageError as e:
        logger.error(f"{__name__}:note_changed - FAILED: {e}")
        raise HTTPException(status_code=500, detail=e.message)


@router.get("/{note_id}/chunks", response_model=list[ChunkResponse])
async def list_chunks(
    note_id: UUID,
    owner_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> list[ChunkResponse]:
    """
    Indexed chunks of a note with their embedding status.

    Raises:
        HTTPException(404): Note not found for owner
    """
    note = await note_crud.get_for_owner(db, note_id, owner_id)
    if note is None:
        raise HTTPException(status_code=404, detail=f"Note not found: {note_id}")

    chunks = await note_chunk_crud.get_for_note(db, note_id)
    embedded = {e.chunk_id for e in await note_embedding_crud.get_for_chunks(db, [c.id for c in chunks])}
    return [
        ChunkResponse(
            id=c.id,
            chunk_index=c.chunk_index,
            text=c.text,
            token_count=c.token_count,
            content_hash=c.content_hash,
            has_embedding=c.id in embedded,
        )
        for c in chunks
    ]
