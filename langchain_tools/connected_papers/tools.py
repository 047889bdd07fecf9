"""LangChain tools for Connected Papers."""

import logging

from langchain.tools import tool

from core.connected_papers import ConnectedPapersError, GraphSnapshot, summarize_snapshot
from core.connected_papers.summary import find_start_node, paper_details
from langchain_tools.utils import output_dict
from .client import _get_connected_papers
from .models import (
    ConnectedPapersGraphOutput,
    ConnectedPapersPaperInfoOutput,
    ConnectedPapersUsageOutput,
)

logger = logging.getLogger(__name__)


@tool
async def connected_papers_graph(
    paper_id: str,
    fresh_only: bool = False,
    wait_until_complete: bool = True,
) -> dict:
    """Get the Connected Papers graph of related work for a paper.

    Connected Papers links a paper to ~40 similar papers by co-citation and
    bibliographic coupling. Graphs are built on demand, so waiting for a
    graph that isn't cached can take a minute.

    Args:
        paper_id: Semantic Scholar paper id (40-char hex)
        fresh_only: Force a rebuild, ignoring cached graphs (default False)
        wait_until_complete: Keep polling until the graph is built (default True)

    Returns:
        Final build status, graph size and parameters, and the start paper.
    """
    client = _get_connected_papers()
    output = ConnectedPapersGraphOutput(paper_id=paper_id, fresh_only=fresh_only)

    final: GraphSnapshot | None = None
    async with client.stream_graph(paper_id, fresh_only, wait_until_complete) as session:
        async for item in session:
            if isinstance(item, ConnectedPapersError):
                logger.error(f"connected_papers_graph failed for '{paper_id}': {item}")
                output.error = f"Failed to get graph: {item.message}"
                break
            output.snapshots_seen += 1
            final = item

    if final is not None:
        output.status = final.status
        output.result = summarize_snapshot(final)
        logger.debug(
            f"connected_papers_graph for {paper_id}: {final.status.value} "
            f"after {output.snapshots_seen} snapshots"
        )
    return output_dict(output)


@tool
async def connected_papers_paper_info(paper_id: str, fresh_only: bool = False) -> dict:
    """Get details of a paper from its Connected Papers graph.

    Returns title, authors, year, venue, identifiers (DOI, arXiv, PubMed),
    abstract and citation counts, taken from the graph's start paper.

    Args:
        paper_id: Semantic Scholar paper id (40-char hex)
        fresh_only: Force a rebuild, ignoring cached graphs (default False)
    """
    client = _get_connected_papers()
    output = ConnectedPapersPaperInfoOutput(paper_id=paper_id)

    try:
        snapshot = await client.get_graph(paper_id, fresh_only=fresh_only, wait_until_complete=True)
    except ConnectedPapersError as e:
        logger.error(f"connected_papers_paper_info failed for '{paper_id}': {e}")
        output.error = f"Failed to get paper info: {e.message}"
        return output_dict(output)

    output.status = snapshot.status
    output.progress = snapshot.progress

    if snapshot.graph is None:
        output.error = f"Graph not available. Status: {snapshot.status.value}"
        return output_dict(output)

    node = find_start_node(snapshot.graph)
    if node is None:
        output.error = f"Paper {paper_id} not found in graph"
        return output_dict(output)

    output.paper = paper_details(node)
    return output_dict(output)


@tool
async def connected_papers_remaining_usages() -> dict:
    """Get the number of Connected Papers graph requests left on the API key."""
    client = _get_connected_papers()
    try:
        remaining = await client.get_remaining_usages()
    except ConnectedPapersError as e:
        logger.error(f"connected_papers_remaining_usages failed: {e}")
        return output_dict(ConnectedPapersUsageOutput(error=f"Failed to get remaining usages: {e.message}"))
    return output_dict(ConnectedPapersUsageOutput(remaining_usages=remaining))
