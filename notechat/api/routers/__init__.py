"""API routers."""

from .chat_stream import cancel_router
from .chat_stream import router as chat_stream_router
from .health import router as health_router
from .notes import router as notes_router
from .threads import router as threads_router

__all__ = [
    "cancel_router",
    "chat_stream_router",
    "health_router",
    "notes_router",
    "threads_router",
]
