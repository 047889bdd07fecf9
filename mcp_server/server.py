"""
MCP server for Connected Papers.

Entry point for the MCP server using STDIO transport.
Run with: python -m mcp_server.server  (or the connected-papers-mcp script)
"""

import asyncio
import json
import logging
import sys
from typing import Any

from dotenv import load_dotenv

load_dotenv()

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from core.config import configure_logging
from core.connected_papers import ConnectedPapersClient, ConnectedPapersConfig
from core.semantic_scholar import SemanticScholarClient, SemanticScholarConfig

from .errors import ToolError

# stdout carries the MCP protocol, so console logging goes to stderr
logging.basicConfig(
    level=logging.INFO,
    stream=sys.stderr,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Client instances (initialized on startup)
_client: ConnectedPapersClient | None = None
_s2_client: SemanticScholarClient | None = None

# Create MCP server
server = Server("connected-papers")


async def init_client() -> None:
    """Create the Connected Papers and Semantic Scholar clients."""
    global _client, _s2_client

    config = ConnectedPapersConfig()
    if config.uses_demo_token:
        logger.warning(
            "CONNECTED_PAPERS_API_KEY not set, using TEST_TOKEN (free-access papers only)"
        )
    _client = ConnectedPapersClient(config)
    logger.info(f"Connected Papers client initialized for {config.base_url}")

    s2_config = SemanticScholarConfig()
    if not s2_config.api_key:
        logger.info("SEMANTIC_SCHOLAR_API_KEY not set, using the shared public rate limit")
    _s2_client = SemanticScholarClient(s2_config)


async def cleanup_client() -> None:
    """Close the API clients."""
    global _client, _s2_client

    if _client:
        await _client.close()
        _client = None
    if _s2_client:
        await _s2_client.close()
        _s2_client = None


def get_client() -> ConnectedPapersClient | None:
    """Get client instance."""
    return _client


def _require_client() -> ConnectedPapersClient:
    if _client is None:
        raise ToolError("Connected Papers client not initialized. Use health.check.")
    return _client


def _require_s2_client() -> SemanticScholarClient:
    if _s2_client is None:
        raise ToolError("Semantic Scholar client not initialized. Use health.check.")
    return _s2_client


# Import tool handlers after server is created
from .tools import account, graph, health, papers


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List all available tools."""
    tools = []
    tools.extend(health.get_tools())
    tools.extend(graph.get_tools())
    tools.extend(account.get_tools())
    tools.extend(papers.get_tools())
    return tools


async def dispatch(name: str, arguments: dict[str, Any]) -> dict[str, Any]:
    """Route a tool call to its handler."""
    if name.startswith("health."):
        return await health.handle(name, arguments, _client)
    if name.startswith("graph."):
        return await graph.handle(name, arguments, _require_client())
    if name.startswith("account."):
        return await account.handle(name, arguments, _require_client())
    if name.startswith("papers."):
        return await papers.handle(name, arguments, _require_s2_client())
    raise ToolError(f"Unknown tool: {name}. Use health.check to see available tools.")


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        result = await dispatch(name, arguments or {})
        return [TextContent(type="text", text=json.dumps(result, default=str))]

    except ToolError as e:
        # Return execution error with actionable message
        return [TextContent(
            type="text",
            text=json.dumps({"error": e.message, "details": e.details}),
        )]
    except Exception as e:
        logger.exception(f"Unexpected error in tool {name}")
        return [TextContent(
            type="text",
            text=json.dumps({"error": f"Internal error: {str(e)}"}),
        )]


async def main():
    """Run the MCP server."""
    configure_logging("mcp-server")
    logger.info("Starting Connected Papers MCP server")
    await init_client()

    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    finally:
        await cleanup_client()


if __name__ == "__main__":
    asyncio.run(main())
