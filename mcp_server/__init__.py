"""MCP server exposing Connected Papers graphs as tools."""

__all__ = ["main"]


def main():
    """Entry point for the MCP server."""
    import asyncio
    from .server import main as _main

    asyncio.run(_main())
