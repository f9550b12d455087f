"""
Conversation turn stages and state.

Dependencies: pydantic, langchain_core.messages
System role: Explicit state machine vocabulary for one chat turn
"""

from enum import Enum

from langchain_core.messages import BaseMessage
from pydantic import BaseModel, ConfigDict, Field

from notechat.boundary.db.models.message_model import MessageStatus
from notechat.models.chat import ChatTurnRequest
from notechat.models.retrieval import AssembledContext


class TurnStage(str, Enum):
    """Stages of a turn, in execution order."""

    VALIDATE = "validate"
    LOAD_HISTORY = "load_history"
    RETRIEVE_CONTEXT = "retrieve_context"
    COMPOSE_PROMPT = "compose_prompt"
    GENERATE = "generate"
    PERSIST = "persist"
    DONE = "done"


STAGE_ORDER: tuple[TurnStage, ...] = tuple(TurnStage)


class TurnState(BaseModel):
    """
    Immutable snapshot of a turn; each stage returns a new one.

    Attributes:
        request: Incoming turn
        message: Trimmed user message (set by validate)
        history: Prior messages, oldest first
        context: Assembled retrieval context
        prompt: Messages sent to the completion provider
        answer: Text streamed so far
        status: How generation ended (None until generate finishes)
        generation_error: Provider failure message, if any
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    request: ChatTurnRequest
    message: str = ""
    history: list[BaseMessage] = Field(default_factory=list)
    context: AssembledContext = Field(default_factory=AssembledContext.empty)
    prompt: list[BaseMessage] = Field(default_factory=list)
    answer: str = ""
    status: MessageStatus | None = None
    generation_error: str | None = None

    def advance(self, **changes) -> "TurnState":
        """Copy of this state with the given fields replaced."""
        return self.model_copy(update=changes)
