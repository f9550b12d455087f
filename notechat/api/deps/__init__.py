"""API-specific dependencies."""

from .dependencies import (
    ServiceContainer,
    build_container,
    get_chat_service,
    get_container,
    get_db,
    get_ingestion_service,
    get_thread_service,
)

__all__ = [
    "ServiceContainer",
    "build_container",
    "get_chat_service",
    "get_container",
    "get_db",
    "get_ingestion_service",
    "get_thread_service",
]
