"""Health check tool for MCP server."""

from typing import Any

from mcp.types import Tool

from core.connected_papers import ConnectedPapersClient, ConnectedPapersError

from ..errors import ToolError


def get_tools() -> list[Tool]:
    """Get health check tools."""
    return [
        Tool(
            name="health.check",
            description="Check connectivity to the Connected Papers API and report the API key in use.",
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
    client: ConnectedPapersClient | None,
) -> dict[str, Any]:
    """Handle health check tool calls."""
    if name != "health.check":
        raise ToolError(f"Unknown health tool: {name}")

    results: dict[str, Any] = {}

    if client:
        try:
            remaining = await client.get_remaining_usages()
            results["connected_papers"] = {
                "healthy": True,
                "base_url": client.base_url,
                "demo_token": client.config.uses_demo_token,
                "remaining_usages": remaining,
            }
        except ConnectedPapersError as e:
            results["connected_papers"] = {"healthy": False, "error": e.message}
    else:
        results["connected_papers"] = {"healthy": False, "error": "Not initialized"}

    results["overall_healthy"] = all(
        r.get("healthy", False) for r in results.values() if isinstance(r, dict)
    )

    return results
