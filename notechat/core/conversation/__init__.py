"""
Conversation orchestration: turn stages, prompt composition, cancellation.
"""

from notechat.core.conversation.cancellation import CancellationRegistry
from notechat.core.conversation.orchestrator import ConversationOrchestrator
from notechat.core.conversation.stages import TurnStage, TurnState

__all__ = ["CancellationRegistry", "ConversationOrchestrator", "TurnStage", "TurnState"]
