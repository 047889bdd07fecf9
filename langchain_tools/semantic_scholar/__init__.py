"""
Semantic Scholar tools for LangChain.

Find papers and the Semantic Scholar ids that Connected Papers graphs are
keyed by.
Provides: semantic_scholar_search, semantic_scholar_autocomplete
"""

from .models import S2AutocompleteOutput, S2SearchOutput
from .tools import semantic_scholar_autocomplete, semantic_scholar_search

__all__ = [
    "S2AutocompleteOutput",
    "S2SearchOutput",
    "semantic_scholar_autocomplete",
    "semantic_scholar_search",
]
