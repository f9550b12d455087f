"""
Thread API endpoints.

Routes:
- POST /threads - Create thread
- GET /threads - List an owner's threads (most recent first)
- GET /threads/{id} - Get thread
- PATCH /threads/{id} - Rename thread
- DELETE /threads/{id} - Delete thread and its messages
- GET /threads/{id}/messages - Paginated message history

Dependencies: notechat.application.services.thread_service, notechat.models
System role: Thread management HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from notechat.api.deps import get_thread_service
from notechat.application.services.thread_service import ThreadService
from notechat.boundary.db.models.message_model import MessageModel
from notechat.core.exceptions import ThreadNotFoundError
from notechat.models.chat import ChatHistoryResponse, ChatMessageResponse
from notechat.models.thread import CreateThreadRequest, ThreadResponse, UpdateThreadRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/threads", tags=["threads"])


def _to_message_response(message: MessageModel) -> ChatMessageResponse:
    return ChatMessageResponse(
        id=message.id,
        role=message.role.value,
        content=message.content,
        token_count=message.token_count,
        status=message.status.value,
        created_at=message.created_at,
    )


@router.post("", response_model=ThreadResponse, status_code=201)
async def create_thread(
    request: CreateThreadRequest,
    thread_service: ThreadService = Depends(get_thread_service),
) -> ThreadResponse:
    """Create a new thread for an owner."""
    thread = await thread_service.create_thread(request.owner_id, title=request.title)
    return ThreadResponse.model_validate(thread)


@router.get("", response_model=list[ThreadResponse])
async def list_threads(
    owner_id: UUID,
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    thread_service: ThreadService = Depends(get_thread_service),
) -> list[ThreadResponse]:
    """List an owner's threads by last activity."""
    threads = await thread_service.list_threads(owner_id, limit=limit, offset=offset)
    return [ThreadResponse.model_validate(t) for t in threads]


@router.get("/{thread_id}", response_model=ThreadResponse)
async def get_thread(
    thread_id: UUID,
    owner_id: UUID,
    thread_service: ThreadService = Depends(get_thread_service),
) -> ThreadResponse:
    """
    Get a thread.

    Raises:
        HTTPException(404): Thread not found for owner
    """
    try:
        thread = await thread_service.get_thread(thread_id, owner_id)
    except ThreadNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return ThreadResponse.model_validate(thread)


@router.patch("/{thread_id}", response_model=ThreadResponse)
async def rename_thread(
    thread_id: UUID,
    owner_id: UUID,
    request: UpdateThreadRequest,
    thread_service: ThreadService = Depends(get_thread_service),
) -> ThreadResponse:
    """
    Rename a thread.

    Raises:
        HTTPException(404): Thread not found for owner
    """
    try:
        thread = await thread_service.rename_thread(thread_id, owner_id, request.title)
    except ThreadNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return ThreadResponse.model_validate(thread)


@router.delete("/{thread_id}", status_code=204)
async def delete_thread(
    thread_id: UUID,
    owner_id: UUID,
    thread_service: ThreadService = Depends(get_thread_service),
) -> None:
    """
    Delete a thread and its messages.

    Raises:
        HTTPException(404): Thread not found for owner
    """
    try:
        await thread_service.delete_thread(thread_id, owner_id)
    except ThreadNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("/{thread_id}/messages", response_model=ChatHistoryResponse)
async def get_messages(
    thread_id: UUID,
    owner_id: UUID,
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    thread_service: ThreadService = Depends(get_thread_service),
) -> ChatHistoryResponse:
    """
    Get a page of a thread's messages, oldest first.

    Raises:
        HTTPException(404): Thread not found for owner
    """
    try:
        messages, total = await thread_service.get_messages(thread_id, owner_id, limit=limit, offset=offset)
    except ThreadNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return ChatHistoryResponse(messages=[_to_message_response(m) for m in messages], total=total)
