"""Client access for the Connected Papers tools."""

from core.connected_papers import ConnectedPapersClient, get_connected_papers_client


def _get_connected_papers() -> ConnectedPapersClient:
    """Get the shared Connected Papers client (lazy init)."""
    return get_connected_papers_client()
