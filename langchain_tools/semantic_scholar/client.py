"""Client access for the Semantic Scholar tools."""

from core.semantic_scholar import SemanticScholarClient, get_semantic_scholar_client


def _get_semantic_scholar() -> SemanticScholarClient:
    """Get the shared Semantic Scholar client (lazy init)."""
    return get_semantic_scholar_client()
