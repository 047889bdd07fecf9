"""Validation utilities for MCP tools."""

from typing import Any

from .errors import ValidationError


def parse_paper_id_arg(arguments: dict[str, Any], key: str = "id") -> str:
    """Get a non-empty paper id from arguments dict."""
    value = arguments.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(key, "a non-empty Semantic Scholar paper id is required")
    return value.strip()


def parse_bool_arg(arguments: dict[str, Any], key: str, default: bool = False) -> bool:
    """Get an optional boolean flag from arguments dict."""
    value = arguments.get(key, default)
    if not isinstance(value, bool):
        raise ValidationError(key, "must be true or false")
    return value
