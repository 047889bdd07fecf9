"""API account tools for MCP server."""

from typing import Any

from mcp.types import Tool

from core.connected_papers import ConnectedPapersClient, ConnectedPapersError

from ..errors import ServiceError, ToolError
from ..response_utils import format_id_list


def get_tools() -> list[Tool]:
    """Get account tools."""
    return [
        Tool(
            name="account.remaining_usages",
            description="Get the remaining number of API requests available for your API key.",
            inputSchema={
                "type": "object",
                "properties": {},
                "additionalProperties": False,
            },
        ),
        Tool(
            name="account.free_access_papers",
            description="Get a list of paper IDs that have free access (no API key required).",
            inputSchema={
                "type": "object",
                "properties": {},
                "additionalProperties": False,
            },
        ),
    ]


async def handle(
    name: str,
    arguments: dict[str, Any],
    client: ConnectedPapersClient,
) -> dict[str, Any]:
    """Handle account tool calls."""
    if name == "account.remaining_usages":
        try:
            remaining = await client.get_remaining_usages()
        except ConnectedPapersError as e:
            raise ServiceError("get remaining usages", e.message, e.status_code) from e
        return {"remaining_usages": remaining}

    if name == "account.free_access_papers":
        try:
            papers = await client.get_free_access_papers()
        except ConnectedPapersError as e:
            raise ServiceError("get free access papers", e.message, e.status_code) from e
        return format_id_list(papers, "free_access_papers")

    raise ToolError(f"Unknown account tool: {name}")
