"""
LangChain tools for Connected Papers.

Tools provided:
- connected_papers_graph: Related-work graph for a paper (polls until built)
- connected_papers_paper_info: Start paper details from a graph
- connected_papers_remaining_usages: Requests left on the API key
- semantic_scholar_search: Keyword paper search, returns paper ids
- semantic_scholar_autocomplete: Paper suggestions for a partial query
"""

from .connected_papers import (
    ConnectedPapersGraphOutput,
    ConnectedPapersPaperInfoOutput,
    ConnectedPapersUsageOutput,
    connected_papers_graph,
    connected_papers_paper_info,
    connected_papers_remaining_usages,
)
from .semantic_scholar import (
    S2AutocompleteOutput,
    S2SearchOutput,
    semantic_scholar_autocomplete,
    semantic_scholar_search,
)

__all__ = [
    "connected_papers_graph",
    "connected_papers_paper_info",
    "connected_papers_remaining_usages",
    "semantic_scholar_search",
    "semantic_scholar_autocomplete",
    "ConnectedPapersGraphOutput",
    "ConnectedPapersPaperInfoOutput",
    "ConnectedPapersUsageOutput",
    "S2SearchOutput",
    "S2AutocompleteOutput",
]
