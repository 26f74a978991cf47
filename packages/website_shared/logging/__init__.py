"""Public logging API for s3website components.

This package wraps Python's ``logging`` module with stdout emission and
structured context propagation.
"""

from .config import configure_logging, get_logger
from .context import bind_context, get_context, log_context
from .public_api import (
    CompletionContext,
    InvocationContext,
    PublicApiLoggingConcern,
    public_api_logged,
)

__all__ = [
    "bind_context",
    "CompletionContext",
    "configure_logging",
    "get_context",
    "get_logger",
    "InvocationContext",
    "log_context",
    "PublicApiLoggingConcern",
    "public_api_logged",
]
