"""
Correlation ID management.

Carries the in-flight chat request ID through async call stacks so every
log line of a turn can be tied together.

Dependencies: contextvars (stdlib)
System role: Request tracing across async boundaries
"""

from contextvars import ContextVar, Token

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> str | None:
    """Return the correlation ID bound to the current context, if any."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> Token:
    """
    Bind a correlation ID to the current context.

    Args:
        correlation_id: Identifier to attach (usually the chat request ID)

    Returns:
        Token: Pass to reset_correlation_id() to restore the previous value
    """
    return _correlation_id.set(correlation_id)


def reset_correlation_id(token: Token) -> None:
    """Restore the correlation ID that was active before set_correlation_id()."""
    _correlation_id.reset(token)
