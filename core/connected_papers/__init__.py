"""Connected Papers graph client.

Fetch the citation graph Connected Papers builds around a paper, following
the build through QUEUED / IN_PROGRESS states, stale cached graphs, and
service overload.

Example:
    from core.connected_papers import get_graph, stream_graph

    # Final answer only
    snapshot = await get_graph(paper_id, wait_until_complete=True)
    print(snapshot.status, len(snapshot.graph["nodes"]))

    # Every intermediate state
    async with stream_graph(paper_id) as session:
        async for item in session:
            print(item)

Environment Variables:
    CONNECTED_PAPERS_API_KEY: API key (default: TEST_TOKEN, free-access papers only)
    CONNECTED_PAPERS_BASE_URL: API root override
"""

from .base import GraphFetcher
from .client import ConnectedPapersClient, get_connected_papers_client
from .config import (
    OVERLOAD_RETRY_DELAYS,
    ConnectedPapersConfig,
    get_connected_papers_config,
)
from .errors import (
    ApiKeyNotFoundError,
    ConnectedPapersError,
    RequestFailedError,
    ResponseDecodeError,
    TransportError,
)
from .session import POLL_INTERVAL, GraphRetrievalSession, SessionItem, SessionState, retrieve
from .summary import GraphSummary, PaperDetails, SnapshotSummary, summarize_snapshot
from .types import TERMINAL_STATUSES, Graph, GraphSnapshot, GraphStatus


async def get_graph(
    paper_id: str,
    fresh_only: bool = False,
    wait_until_complete: bool = False,
) -> GraphSnapshot:
    """Fetch a paper's graph with the shared client.

    Args:
        paper_id: Semantic Scholar paper id
        fresh_only: Force a rebuild, ignoring cached graphs
        wait_until_complete: Poll until the build reaches a terminal status

    Returns:
        The final snapshot of the retrieval

    Raises:
        ConnectedPapersError: A request failed
    """
    client = get_connected_papers_client()
    return await client.get_graph(paper_id, fresh_only, wait_until_complete)


def stream_graph(
    paper_id: str,
    fresh_only: bool = False,
    wait_until_complete: bool = True,
) -> GraphRetrievalSession:
    """Start a retrieval session with the shared client."""
    client = get_connected_papers_client()
    return client.stream_graph(paper_id, fresh_only, wait_until_complete)


__all__ = [
    # Main functions
    "get_graph",
    "stream_graph",
    "retrieve",
    # Client
    "ConnectedPapersClient",
    "GraphFetcher",
    "get_connected_papers_client",
    # Session
    "GraphRetrievalSession",
    "SessionItem",
    "SessionState",
    "POLL_INTERVAL",
    # Types
    "Graph",
    "GraphSnapshot",
    "GraphStatus",
    "TERMINAL_STATUSES",
    # Summaries
    "GraphSummary",
    "PaperDetails",
    "SnapshotSummary",
    "summarize_snapshot",
    # Config
    "ConnectedPapersConfig",
    "OVERLOAD_RETRY_DELAYS",
    "get_connected_papers_config",
    # Errors
    "ConnectedPapersError",
    "RequestFailedError",
    "TransportError",
    "ResponseDecodeError",
    "ApiKeyNotFoundError",
]
