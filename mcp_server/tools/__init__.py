"""MCP tool definitions for Connected Papers."""

from . import account, graph, health, papers

__all__ = [
    "account",
    "graph",
    "health",
    "papers",
]
