"""
Chat service for streamed, cancellable question answering.

Registers each turn with the cancellation registry, delegates the turn to
the conversation orchestrator, and releases the registration when the
stream ends.

Dependencies: notechat.core.conversation
System role: Chat service orchestration layer
"""

import logging
from collections.abc import AsyncGenerator

from notechat.core.conversation.cancellation import CancellationRegistry
from notechat.core.conversation.orchestrator import ConversationOrchestrator
from notechat.core.exceptions import InputError
from notechat.models.chat import ChatTurnRequest
from notechat.models.streaming import ErrorCode, StreamEvent

logger = logging.getLogger(__name__)


class ChatService:
    """Entry point for chat turns from any transport."""

    def __init__(
        self,
        orchestrator: ConversationOrchestrator,
        registry: CancellationRegistry,
    ) -> None:
        """
        Initialize chat service.

        Args:
            orchestrator: Runs the turn state machine
            registry: Shared registry of in-flight requests
        """
        self.orchestrator = orchestrator
        self.registry = registry

    async def stream_turn(self, request: ChatTurnRequest) -> AsyncGenerator[StreamEvent, None]:
        """
        Stream one turn.

        Yields:
            StreamEvent: TOKEN events then one COMPLETE or ERROR event. A
            request_id already in flight yields a DUPLICATE_REQUEST error.
        """
        try:
            cancel_event = self.registry.register(request.request_id)
        except InputError as e:
            logger.warning(f"{__name__}:stream_turn - {e}")
            yield StreamEvent.error(ErrorCode.DUPLICATE_REQUEST, e.message, request_id=request.request_id)
            return

        try:
            async for event in self.orchestrator.run_turn(request, cancel_event):
                yield event
        finally:
            self.registry.release(request.request_id)

    def cancel(self, request_id: str) -> bool:
        """Cancel an in-flight turn. Returns False when it is not running."""
        return self.registry.cancel(request_id)
