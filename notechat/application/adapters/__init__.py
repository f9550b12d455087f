"""Adapters between storage rows and core/langchain types."""

from notechat.application.adapters.chat_history_adapter import ChatHistoryAdapter

__all__ = ["ChatHistoryAdapter"]
