"""
Application services.
"""

from notechat.application.services.chat_service import ChatService
from notechat.application.services.ingestion_service import IngestionService
from notechat.application.services.thread_service import ThreadService

__all__ = ["ChatService", "IngestionService", "ThreadService"]
