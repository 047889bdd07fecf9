"""Semantic Scholar paper lookup tools for MCP server.

These find the Semantic Scholar ids that graph.get expects.
"""

from typing import Any

from mcp.types import Tool

from core.semantic_scholar import (
    InvalidParameterError,
    PaperField,
    SearchFilters,
    SemanticScholarClient,
    SemanticScholarError,
    YearRange,
)

from ..errors import ServiceError, ToolError, ValidationError
from ..response_utils import format_model

_S2_HINT = "Semantic Scholar may be rate limiting; set SEMANTIC_SCHOLAR_API_KEY."

SEARCH_FIELDS = [
    PaperField.TITLE,
    PaperField.YEAR,
    PaperField.AUTHORS,
    PaperField.VENUE,
    PaperField.CITATION_COUNT,
    PaperField.EXTERNAL_IDS,
]


def get_tools() -> list[Tool]:
    """Get paper lookup tools."""
    return [
        Tool(
            name="papers.search",
            description=(
                "Search Semantic Scholar for papers by keywords. Returns paper IDs usable "
                "with graph.get, plus title, year, authors and citation count."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "query": {"type": "string", "description": "Plain-text search query"},
                    "limit": {
                        "type": "integer",
                        "description": "Number of results (1-100)",
                        "default": 10,
                        "minimum": 1,
                        "maximum": 100,
                    },
                    "year_from": {"type": "integer", "description": "Earliest publication year"},
                    "year_to": {"type": "integer", "description": "Latest publication year"},
                },
                "required": ["query"],
                "additionalProperties": False,
            },
        ),
        Tool(
            name="papers.autocomplete",
            description="Suggest papers matching a partial title or query, with their IDs.",
            inputSchema={
                "type": "object",
                "properties": {
                    "query": {"type": "string", "description": "Partial query (first 100 characters used)"},
                },
                "required": ["query"],
                "additionalProperties": False,
            },
        ),
    ]


def _parse_query(arguments: dict[str, Any]) -> str:
    value = arguments.get("query")
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("query", "a non-empty query is required")
    return value.strip()


def _parse_optional_int(arguments: dict[str, Any], key: str) -> int | None:
    value = arguments.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(key, "must be an integer")
    return value


async def handle(
    name: str,
    arguments: dict[str, Any],
    client: SemanticScholarClient,
) -> dict[str, Any]:
    """Handle paper lookup tool calls."""
    if name == "papers.search":
        query = _parse_query(arguments)
        limit = _parse_optional_int(arguments, "limit")
        if limit is None:
            limit = 10
        year_from = _parse_optional_int(arguments, "year_from")
        year_to = _parse_optional_int(arguments, "year_to")

        try:
            filters = SearchFilters()
            if year_from is not None or year_to is not None:
                filters.year = YearRange(year_from, year_to)
            page = await client.search(query, fields=SEARCH_FIELDS, filters=filters, limit=limit)
        except InvalidParameterError as e:
            raise ValidationError("arguments", e.message) from e
        except SemanticScholarError as e:
            raise ServiceError("search papers", e.message, e.status_code, hint=_S2_HINT) from e

        return {
            "query": query,
            "total": page.total,
            "papers": [
                {
                    "id": paper.paper_id,
                    "title": paper.title,
                    "year": paper.year,
                    "authors": paper.author_names,
                    "venue": paper.venue or None,
                    "citation_count": paper.citation_count,
                    "doi": paper.external_ids.doi if paper.external_ids else None,
                }
                for paper in page.data
            ],
        }

    if name == "papers.autocomplete":
        query = _parse_query(arguments)
        try:
            matches = await client.autocomplete(query)
        except SemanticScholarError as e:
            raise ServiceError("autocomplete", e.message, e.status_code, hint=_S2_HINT) from e
        return {"matches": [format_model(match) for match in matches], "count": len(matches)}

    raise ToolError(f"Unknown papers tool: {name}")
