"""
Connected Papers tools for LangChain.

Connected Papers builds a graph of related work around a paper from
co-citation and bibliographic coupling.
Provides: connected_papers_graph, connected_papers_paper_info,
connected_papers_remaining_usages
"""

from .models import (
    ConnectedPapersGraphOutput,
    ConnectedPapersPaperInfoOutput,
    ConnectedPapersUsageOutput,
)
from .tools import (
    connected_papers_graph,
    connected_papers_paper_info,
    connected_papers_remaining_usages,
)

__all__ = [
    "ConnectedPapersGraphOutput",
    "ConnectedPapersPaperInfoOutput",
    "ConnectedPapersUsageOutput",
    "connected_papers_graph",
    "connected_papers_paper_info",
    "connected_papers_remaining_usages",
]
