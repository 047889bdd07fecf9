"""Core utilities for async HTTP clients, retry schedules, and error handling."""

from .async_context import AsyncContextManager
from .async_http_client import (
    BaseAsyncHttpClient,
    cleanup_all_clients,
    register_cleanup,
)
from .http_errors import safe_http_request
from .retry import retry_on_result

__all__ = [
    "AsyncContextManager",
    "BaseAsyncHttpClient",
    "cleanup_all_clients",
    "register_cleanup",
    "retry_on_result",
    "safe_http_request",
]
