"""
Observability: logging configuration and correlation ID propagation.
"""

from notechat.observability.correlation import (
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from notechat.observability.logger import configure_logging

__all__ = [
    "configure_logging",
    "get_correlation_id",
    "set_correlation_id",
    "reset_correlation_id",
]
