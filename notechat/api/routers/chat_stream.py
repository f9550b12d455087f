"""
WebSocket streaming chat endpoint and cancel side channel.

Routes:
- WS /ws/threads/{thread_id}/chat?owner_id=...
- POST /chat/requests/{request_id}/cancel

Each chat event runs as its own task so the socket keeps reading (cancel
and ping frames) while an answer streams.

Dependencies: notechat.application.services.chat_service
System role: WebSocket streaming HTTP API
"""

import asyncio
import json
import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from notechat.api.deps import get_chat_service
from notechat.application.services.chat_service import ChatService
from notechat.models.chat import CancelResponse, ChatTurnRequest
from notechat.models.streaming import (
    ClientCancelEvent,
    ClientChatEvent,
    ClientEventType,
    ErrorCode,
    StreamEvent,
    StreamEventType,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["streaming"])
cancel_router = APIRouter(prefix="/chat", tags=["chat"])


class _SocketSender:
    """Serializes sends from concurrent turn tasks; drops sends after disconnect."""

    def __init__(self, websocket: WebSocket) -> None:
        self.websocket = websocket
        self.connected = True
        self._lock = asyncio.Lock()

    async def send(self, payload: dict[str, Any]) -> None:
        if not self.connected:
            return
        async with self._lock:
            try:
                await self.websocket.send_json(payload)
            except (WebSocketDisconnect, RuntimeError) as e:
                logger.info(f"{__name__}:send - client gone, dropping further events ({type(e).__name__})")
                self.connected = False


async def _stream_turn(sender: _SocketSender, chat_service: ChatService, request: ChatTurnRequest) -> None:
    """Forward every event of one turn to the socket."""
    event_count = 0
    try:
        async for event in chat_service.stream_turn(request):
            event_count += 1
            await sender.send(event.to_dict())
    except Exception as e:
        logger.exception(
            "Unexpected error during chat stream",
            extra={"request_id": request.request_id, "error_type": type(e).__name__, "error_msg": str(e)},
        )
        await sender.send(
            StreamEvent.error(ErrorCode.PROCESSING_ERROR, str(e), request_id=request.request_id).to_dict()
        )
        return
    logger.info(
        "Chat stream completed",
        extra={"thread_id": str(request.thread_id), "request_id": request.request_id, "total_events": event_count},
    )


@router.websocket("/ws/threads/{thread_id}/chat")
async def websocket_chat(
    websocket: WebSocket,
    thread_id: UUID,
    owner_id: UUID,
    chat_service: ChatService = Depends(get_chat_service),
) -> None:
    """
    WebSocket endpoint for streaming chat responses.

    Client sends:
        {"event": "chat", "data": {"message": "...", "request_id": "optional"}}
        {"event": "cancel", "data": {"request_id": "..."}}
        {"event": "ping"}

    Server sends:
        {"event": "connected", "data": {"thread_id": "..."}}
        {"event": "token", "data": {"text": "...", "index": 0, "request_id": "..."}}
        {"event": "complete", "data": {"full_answer", "citations", "context_summary", "status", "request_id"}}
        {"event": "error", "data": {"code": "...", "message": "..."}}
        {"event": "pong", "data": {}}

    Closing the socket cancels in-flight turns; their partial answers are persisted.
    """
    await websocket.accept()
    logger.info(
        "WebSocket connection established",
        extra={"thread_id": str(thread_id), "client_host": str(websocket.client)},
    )

    sender = _SocketSender(websocket)
    await sender.send(StreamEvent(event=StreamEventType.CONNECTED, data={"thread_id": str(thread_id)}).to_dict())

    turns: dict[asyncio.Task, str] = {}

    try:
        while True:
            raw_data = await websocket.receive_text()

            try:
                data = json.loads(raw_data)
            except json.JSONDecodeError as e:
                logger.warning(
                    "Failed to parse JSON",
                    extra={"thread_id": str(thread_id), "error_msg": str(e), "raw_data_preview": raw_data[:50]},
                )
                await sender.send(StreamEvent.error(ErrorCode.INVALID_JSON, "Invalid JSON format").to_dict())
                continue

            if not isinstance(data, dict):
                await sender.send(StreamEvent.error(ErrorCode.INVALID_JSON, "Expected a JSON object").to_dict())
                continue

            event_type = data.get("event")
            event_data = data.get("data") or {}

            if event_type == ClientEventType.PING.value:
                await sender.send(StreamEvent(event=StreamEventType.PONG).to_dict())
                continue

            if event_type == ClientEventType.CANCEL.value:
                try:
                    cancel = ClientCancelEvent.model_validate(event_data)
                except ValidationError:
                    await sender.send(StreamEvent.error(ErrorCode.INVALID_INPUT, "request_id is required").to_dict())
                    continue
                if not chat_service.cancel(cancel.request_id):
                    await sender.send(
                        StreamEvent.error(
                            ErrorCode.INVALID_INPUT,
                            f"No in-flight request: {cancel.request_id}",
                            request_id=cancel.request_id,
                        ).to_dict()
                    )
                continue

            if event_type == ClientEventType.CHAT.value:
                try:
                    chat = ClientChatEvent.model_validate(event_data)
                except ValidationError:
                    await sender.send(StreamEvent.error(ErrorCode.INVALID_INPUT, "Message is required").to_dict())
                    continue

                fields: dict[str, Any] = {"thread_id": thread_id, "owner_id": owner_id, "message": chat.message}
                if chat.request_id:
                    fields["request_id"] = chat.request_id
                request = ChatTurnRequest(**fields)

                logger.info(
                    "Chat event received",
                    extra={"thread_id": str(thread_id), "request_id": request.request_id},
                )
                task = asyncio.create_task(_stream_turn(sender, chat_service, request))
                turns[task] = request.request_id
                task.add_done_callback(lambda t: turns.pop(t, None))
                continue

            logger.warning(
                "Unknown event type received",
                extra={"thread_id": str(thread_id), "event_type": str(event_type)},
            )
            await sender.send(
                StreamEvent.error(ErrorCode.UNKNOWN_EVENT, f"Unknown event type: {event_type}").to_dict()
            )

    except WebSocketDisconnect:
        logger.info("WebSocket client disconnected", extra={"thread_id": str(thread_id)})
    finally:
        sender.connected = False
        pending = dict(turns)
        for request_id in pending.values():
            chat_service.cancel(request_id)
        if pending:
            await asyncio.wait(set(pending))


@cancel_router.post("/requests/{request_id}/cancel", response_model=CancelResponse)
async def cancel_request(
    request_id: str,
    chat_service: ChatService = Depends(get_chat_service),
) -> CancelResponse:
    """Cancel an in-flight turn started on any connection."""
    cancelled = chat_service.cancel(request_id)
    return CancelResponse(request_id=request_id, cancelled=cancelled)
