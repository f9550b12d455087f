"""
In-flight request cancellation.

Maps request IDs to asyncio.Events. The transport handling a turn registers
its request; any other caller (a second WebSocket frame, an HTTP endpoint)
can set the event to stop generation.

Dependencies: asyncio (stdlib)
System role: Cancellation side channel for streaming turns
"""

import asyncio
import logging

from notechat.core.exceptions import InputError

logger = logging.getLogger(__name__)


class CancellationRegistry:
    """Registry of cancel events for in-flight turns. One per process."""

    def __init__(self) -> None:
        self._events: dict[str, asyncio.Event] = {}

    def register(self, request_id: str) -> asyncio.Event:
        """
        Create the cancel event for a request.

        Raises:
            InputError: request_id is already in flight
        """
        if request_id in self._events:
            raise InputError(f"Request already in flight: {request_id}", field="request_id")
        event = asyncio.Event()
        self._events[request_id] = event
        return event

    def cancel(self, request_id: str) -> bool:
        """Signal cancellation. Returns False when the request is unknown or finished."""
        event = self._events.get(request_id)
        if event is None:
            return False
        logger.info(f"{__name__}:cancel - request_id={request_id}")
        event.set()
        return True

    def release(self, request_id: str) -> None:
        """Forget a finished request."""
        self._events.pop(request_id, None)

    def __contains__(self, request_id: str) -> bool:
        return request_id in self._events

    def __len__(self) -> int:
        return len(self._events)
