"""Graph tools for MCP server."""

import logging
from typing import Any

from mcp.types import Tool

from core.connected_papers import (
    ConnectedPapersClient,
    ConnectedPapersError,
    GraphSnapshot,
    summarize_snapshot,
)
from core.connected_papers.summary import find_start_node, paper_details

from ..errors import ServiceError, ToolError
from ..response_utils import format_model
from ..validation_utils import parse_bool_arg, parse_paper_id_arg

logger = logging.getLogger(__name__)

_PAPER_ID_SCHEMA = {
    "type": "string",
    "description": "The (Semantic Scholar primary) ID of the paper",
}
_FRESH_ONLY_SCHEMA = {
    "type": "boolean",
    "description": "If true, force a fresh graph rebuild (ignore cached graphs)",
    "default": False,
}


def get_tools() -> list[Tool]:
    """Get graph tools."""
    return [
        Tool(
            name="graph.get",
            description=(
                "Get the graph of a paper by its Semantic Scholar ID. Returns build status, "
                "graph size and parameters, and the start paper. Polls while the graph is "
                "being built unless wait_until_complete is false."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "id": _PAPER_ID_SCHEMA,
                    "fresh_only": _FRESH_ONLY_SCHEMA,
                    "wait_until_complete": {
                        "type": "boolean",
                        "description": "Keep polling until the graph is built",
                        "default": True,
                    },
                },
                "required": ["id"],
                "additionalProperties": False,
            },
        ),
        Tool(
            name="graph.paper_info",
            description=(
                "Get detailed information about a paper from its graph, including title, "
                "authors, abstract, identifiers and citation counts."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "id": _PAPER_ID_SCHEMA,
                    "fresh_only": _FRESH_ONLY_SCHEMA,
                },
                "required": ["id"],
                "additionalProperties": False,
            },
        ),
    ]


async def _get_graph(
    client: ConnectedPapersClient,
    paper_id: str,
    fresh_only: bool,
    wait_until_complete: bool,
) -> dict[str, Any]:
    final: GraphSnapshot | None = None
    snapshots_seen = 0
    async with client.stream_graph(paper_id, fresh_only, wait_until_complete) as session:
        async for item in session:
            if isinstance(item, ConnectedPapersError):
                raise ServiceError("get graph", item.message, item.status_code)
            snapshots_seen += 1
            final = item

    if final is None:
        raise ToolError(f"No response received for {paper_id}")

    result = format_model(summarize_snapshot(final))
    result["snapshots_seen"] = snapshots_seen
    return result


async def _get_paper_info(
    client: ConnectedPapersClient,
    paper_id: str,
    fresh_only: bool,
) -> dict[str, Any]:
    try:
        snapshot = await client.get_graph(paper_id, fresh_only=fresh_only, wait_until_complete=True)
    except ConnectedPapersError as e:
        raise ServiceError("get paper info", e.message, e.status_code) from e

    if snapshot.graph is None:
        raise ToolError(
            f"Graph not available. Status: {snapshot.status.value}",
            {"status": snapshot.status.value, "progress": snapshot.progress},
        )

    node = find_start_node(snapshot.graph)
    if node is None:
        raise ToolError(f"Paper {paper_id} not found in graph", {"status": snapshot.status.value})

    return format_model(paper_details(node))


async def handle(
    name: str,
    arguments: dict[str, Any],
    client: ConnectedPapersClient,
) -> dict[str, Any]:
    """Handle graph tool calls."""
    paper_id = parse_paper_id_arg(arguments)
    fresh_only = parse_bool_arg(arguments, "fresh_only")

    if name == "graph.get":
        wait = parse_bool_arg(arguments, "wait_until_complete", default=True)
        logger.info(f"graph.get {paper_id} (fresh_only={fresh_only}, wait={wait})")
        return await _get_graph(client, paper_id, fresh_only, wait)

    if name == "graph.paper_info":
        logger.info(f"graph.paper_info {paper_id} (fresh_only={fresh_only})")
        return await _get_paper_info(client, paper_id, fresh_only)

    raise ToolError(f"Unknown graph tool: {name}")
