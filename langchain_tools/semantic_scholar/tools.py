"""LangChain tools for Semantic Scholar paper lookup."""

import logging
from typing import Optional

from langchain.tools import tool

from core.semantic_scholar import (
    InvalidParameterError,
    Paper,
    PaperField,
    SearchFilters,
    SemanticScholarError,
    YearRange,
)
from langchain_tools.utils import output_dict
from .client import _get_semantic_scholar
from .models import S2AutocompleteMatch, S2AutocompleteOutput, S2PaperResult, S2SearchOutput

logger = logging.getLogger(__name__)

SEARCH_FIELDS = [
    PaperField.TITLE,
    PaperField.YEAR,
    PaperField.AUTHORS,
    PaperField.VENUE,
    PaperField.CITATION_COUNT,
    PaperField.EXTERNAL_IDS,
]


def _paper_result(paper: Paper) -> S2PaperResult:
    ids = paper.external_ids
    return S2PaperResult(
        paper_id=paper.paper_id or "",
        title=paper.title,
        year=paper.year,
        authors=paper.author_names[:5],
        venue=paper.venue or None,
        citation_count=paper.citation_count,
        doi=ids.doi if ids else None,
        arxiv_id=ids.arxiv if ids else None,
    )


@tool
async def semantic_scholar_search(
    query: str,
    limit: int = 10,
    from_year: Optional[int] = None,
    to_year: Optional[int] = None,
) -> dict:
    """Search Semantic Scholar for academic papers by keywords.

    Use this to find the Semantic Scholar paper id of a paper before asking
    for its Connected Papers graph.

    Args:
        query: Plain-text search query (no special syntax)
        limit: Maximum results (default 10, max 100)
        from_year: Only include papers from this year onwards
        to_year: Only include papers up to this year

    Returns:
        Matching papers with id, title, year, authors, venue and citation count.
    """
    client = _get_semantic_scholar()
    output = S2SearchOutput(query=query)
    limit = min(max(1, limit), 100)

    try:
        filters = SearchFilters()
        if from_year is not None or to_year is not None:
            filters.year = YearRange(from_year, to_year)
        page = await client.search(query, fields=SEARCH_FIELDS, filters=filters, limit=limit)
    except (InvalidParameterError, SemanticScholarError) as e:
        logger.error(f"semantic_scholar_search failed for '{query}': {e}")
        output.error = f"Search failed: {e.message}"
        return output_dict(output)

    output.total_results = page.total
    output.results = [_paper_result(p) for p in page.data if p.paper_id]
    logger.debug(f"semantic_scholar_search returned {len(output.results)} results for '{query}'")
    return output_dict(output)


@tool
async def semantic_scholar_autocomplete(query: str) -> dict:
    """Suggest papers completing a partial title or query.

    Args:
        query: Partial query; only the first 100 characters are used
    """
    client = _get_semantic_scholar()
    output = S2AutocompleteOutput(query=query)

    try:
        matches = await client.autocomplete(query)
    except SemanticScholarError as e:
        logger.error(f"semantic_scholar_autocomplete failed for '{query}': {e}")
        output.error = f"Autocomplete failed: {e.message}"
        return output_dict(output)

    output.matches = [
        S2AutocompleteMatch(paper_id=m.id, title=m.title, authors=m.authors, year=m.year)
        for m in matches
    ]
    return output_dict(output)
