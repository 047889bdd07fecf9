"""Response formatting utilities for MCP tools."""

from pydantic import BaseModel


def format_model(model: BaseModel) -> dict:
    """Format a pydantic model to a JSON dict, dropping empty fields."""
    return model.model_dump(mode="json", exclude_none=True)


def format_id_list(ids: list[str], key: str) -> dict:
    """Format a list of ids with count."""
    return {key: ids, "count": len(ids)}
