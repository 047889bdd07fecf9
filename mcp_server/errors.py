"""Error handling utilities for MCP tools."""

from typing import Any


class ToolError(Exception):
    """Base class for tool execution errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(ToolError):
    """Input validation failed."""

    def __init__(self, field: str, message: str):
        super().__init__(
            f"Validation error for '{field}': {message}",
            {"field": field},
        )


class ServiceError(ToolError):
    """Upstream API request failed."""

    def __init__(
        self,
        operation: str,
        error: str,
        status_code: int | None = None,
        hint: str = "Check CONNECTED_PAPERS_API_KEY and try account.remaining_usages.",
    ):
        details: dict[str, Any] = {"operation": operation, "error": error}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(
            f"Failed to {operation}: {error}. {hint}",
            details,
        )
