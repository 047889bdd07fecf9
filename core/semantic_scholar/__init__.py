"""Semantic Scholar Graph API client.

Find papers and their Semantic Scholar ids, which are the ids Connected
Papers graphs are keyed by.

Example:
    from core.semantic_scholar import PaperId, get_semantic_scholar_client

    client = get_semantic_scholar_client()
    page = await client.search("literature graph", limit=5)
    paper = await client.get_paper(PaperId.arxiv("2106.15928"))

Environment Variables:
    SEMANTIC_SCHOLAR_API_KEY: API key (optional; raises the rate limit)
    SEMANTIC_SCHOLAR_BASE_URL: API root override
"""

from .client import SemanticScholarClient, get_semantic_scholar_client
from .config import SemanticScholarConfig, get_semantic_scholar_config
from .errors import (
    InvalidParameterError,
    S2ApiKeyNotFoundError,
    S2RequestFailedError,
    S2ResponseDecodeError,
    S2TransportError,
    SemanticScholarError,
)
from .models import (
    Author,
    AutocompletePaper,
    ExternalIds,
    MatchedPaper,
    Paper,
    PaperBulkSearchResponse,
    PaperSearchResponse,
)
from .queries import (
    And,
    DateRange,
    Fuzzy,
    Not,
    Or,
    Phrase,
    Prefix,
    Proximity,
    QueryNode,
    SearchFilters,
    Sort,
    SortField,
    Term,
    YearRange,
)
from .types import FieldOfStudy, PaperField, PaperId, PublicationType

__all__ = [
    # Client
    "SemanticScholarClient",
    "get_semantic_scholar_client",
    # Identifiers and vocabularies
    "PaperId",
    "PaperField",
    "FieldOfStudy",
    "PublicationType",
    # Queries
    "SearchFilters",
    "YearRange",
    "DateRange",
    "QueryNode",
    "Term",
    "Phrase",
    "Prefix",
    "Fuzzy",
    "Proximity",
    "And",
    "Or",
    "Not",
    "Sort",
    "SortField",
    # Models
    "Paper",
    "Author",
    "ExternalIds",
    "AutocompletePaper",
    "PaperSearchResponse",
    "PaperBulkSearchResponse",
    "MatchedPaper",
    # Config
    "SemanticScholarConfig",
    "get_semantic_scholar_config",
    # Errors
    "SemanticScholarError",
    "S2RequestFailedError",
    "S2TransportError",
    "S2ResponseDecodeError",
    "InvalidParameterError",
    "S2ApiKeyNotFoundError",
]
