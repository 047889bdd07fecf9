"""Pydantic output models for the Semantic Scholar tools."""

from typing import Optional

from pydantic import BaseModel, Field


class S2PaperResult(BaseModel):
    """A search hit, keyed by the id Connected Papers graphs use."""

    paper_id: str
    title: Optional[str] = None
    year: Optional[int] = None
    authors: list[str] = Field(default_factory=list)  # First 5
    venue: Optional[str] = None
    citation_count: Optional[int] = None
    doi: Optional[str] = None
    arxiv_id: Optional[str] = None


class S2SearchOutput(BaseModel):
    """Output schema for semantic_scholar_search tool."""

    query: str
    total_results: int = 0
    results: list[S2PaperResult] = Field(default_factory=list)
    error: Optional[str] = None


class S2AutocompleteMatch(BaseModel):
    paper_id: str
    title: str
    authors: str
    year: Optional[int] = None


class S2AutocompleteOutput(BaseModel):
    """Output schema for semantic_scholar_autocomplete tool."""

    query: str
    matches: list[S2AutocompleteMatch] = Field(default_factory=list)
    error: Optional[str] = None
