#!/usr/bin/env python3
"""
CLI for Connected Papers graphs.

Usage:
    # Follow a graph build, one JSON line per snapshot
    connected-papers graph 9397e7acd062245d37350f5c05faf56e9cfae0d6
    connected-papers graph <paper_id> --fresh          # force a rebuild
    connected-papers graph <paper_id> --no-wait        # single report
    connected-papers graph <paper_id> --full           # include the whole graph

    # Other commands
    connected-papers paper <paper_id>                  # start paper details
    connected-papers usage                             # remaining API requests
    connected-papers free-papers                       # free-access paper ids

    # Find paper ids on Semantic Scholar
    connected-papers search "literature graph" --limit 5 --from-year 2018
    connected-papers autocomplete "construction of the lit"

Also runnable as: python -m core.connected_papers.cli
"""

import argparse
import asyncio
import json
import sys
from typing import Any, Optional

from core.config import configure_logging
from core.semantic_scholar import (
    PaperField,
    SearchFilters,
    SemanticScholarClient,
    SemanticScholarError,
    YearRange,
)

from .client import ConnectedPapersClient
from .config import ConnectedPapersConfig
from .errors import ConnectedPapersError
from .summary import find_start_node, paper_details, summarize_snapshot

SEARCH_FIELDS = [PaperField.TITLE, PaperField.YEAR, PaperField.AUTHORS, PaperField.CITATION_COUNT]


def _make_client(args: argparse.Namespace) -> ConnectedPapersClient:
    config = ConnectedPapersConfig()
    if args.api_key:
        config.api_key = args.api_key
    return ConnectedPapersClient(config)


def _make_s2_client(args: argparse.Namespace) -> SemanticScholarClient:
    return SemanticScholarClient()


def _print_json(data: Any, pretty: bool = False) -> None:
    print(json.dumps(data, indent=2 if pretty else None, default=str), flush=True)


def _print_error(error: ConnectedPapersError | SemanticScholarError) -> None:
    _print_json({"error": error.message, "status_code": error.status_code})


async def _graph(args: argparse.Namespace) -> int:
    async with _make_client(args) as client:
        session = client.stream_graph(
            args.paper_id,
            fresh_only=args.fresh,
            wait_until_complete=not args.no_wait,
        )
        async with session:
            async for item in session:
                if isinstance(item, ConnectedPapersError):
                    _print_error(item)
                    return 1
                if args.full:
                    _print_json(item.model_dump(mode="json"))
                else:
                    _print_json(summarize_snapshot(item).model_dump(mode="json", exclude_none=True))
    return 0


async def _paper(args: argparse.Namespace) -> int:
    async with _make_client(args) as client:
        try:
            snapshot = await client.get_graph(
                args.paper_id, fresh_only=args.fresh, wait_until_complete=True
            )
        except ConnectedPapersError as e:
            _print_error(e)
            return 1

    node = find_start_node(snapshot.graph) if snapshot.graph else None
    if node is None:
        _print_json(
            {
                "error": f"Graph not available. Status: {snapshot.status.value}",
                "status": snapshot.status.value,
                "progress": snapshot.progress,
            },
            pretty=True,
        )
        return 1
    _print_json(paper_details(node).model_dump(mode="json"), pretty=True)
    return 0


async def _usage(args: argparse.Namespace) -> int:
    async with _make_client(args) as client:
        try:
            remaining = await client.get_remaining_usages()
        except ConnectedPapersError as e:
            _print_error(e)
            return 1
    _print_json({"remaining_usages": remaining})
    return 0


async def _free_papers(args: argparse.Namespace) -> int:
    async with _make_client(args) as client:
        try:
            papers = await client.get_free_access_papers()
        except ConnectedPapersError as e:
            _print_error(e)
            return 1
    _print_json({"free_access_papers": papers, "count": len(papers)}, pretty=True)
    return 0


async def _search(args: argparse.Namespace) -> int:
    filters = SearchFilters()
    async with _make_s2_client(args) as client:
        try:
            if args.from_year is not None or args.to_year is not None:
                filters.year = YearRange(args.from_year, args.to_year)
            page = await client.search(
                args.query, fields=SEARCH_FIELDS, filters=filters, limit=args.limit
            )
        except SemanticScholarError as e:
            _print_error(e)
            return 1
    for paper in page.data:
        _print_json(
            {
                "id": paper.paper_id,
                "title": paper.title,
                "year": paper.year,
                "authors": paper.author_names,
                "citation_count": paper.citation_count,
            }
        )
    return 0


async def _autocomplete(args: argparse.Namespace) -> int:
    async with _make_s2_client(args) as client:
        try:
            matches = await client.autocomplete(args.query)
        except SemanticScholarError as e:
            _print_error(e)
            return 1
    for match in matches:
        _print_json({"id": match.id, "title": match.title, "authors_year": match.authors_year})
    return 0


def cmd_graph(args):
    """Stream a graph retrieval."""
    return asyncio.run(_graph(args))


def cmd_paper(args):
    """Show the start paper of a graph."""
    return asyncio.run(_paper(args))


def cmd_usage(args):
    """Show remaining API usages."""
    return asyncio.run(_usage(args))


def cmd_free_papers(args):
    """List free-access papers."""
    return asyncio.run(_free_papers(args))


def cmd_search(args):
    """Search Semantic Scholar for papers."""
    return asyncio.run(_search(args))


def cmd_autocomplete(args):
    """Suggest papers for a partial query."""
    return asyncio.run(_autocomplete(args))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="connected-papers",
        description="Fetch citation graphs from Connected Papers",
    )
    parser.add_argument(
        "--api-key",
        help="API key (default: CONNECTED_PAPERS_API_KEY, or the TEST_TOKEN demo key)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # graph command
    graph_parser = subparsers.add_parser("graph", help="Follow a graph build")
    graph_parser.add_argument("paper_id", help="Semantic Scholar paper id")
    graph_parser.add_argument(
        "--fresh", action="store_true", help="Force a rebuild, ignoring cached graphs"
    )
    graph_parser.add_argument(
        "--no-wait", action="store_true",
        help="Report the first answer instead of polling until the build finishes",
    )
    graph_parser.add_argument(
        "--full", action="store_true", help="Print whole snapshots instead of summaries"
    )
    graph_parser.set_defaults(func=cmd_graph)

    # paper command
    paper_parser = subparsers.add_parser("paper", help="Show the start paper of a graph")
    paper_parser.add_argument("paper_id", help="Semantic Scholar paper id")
    paper_parser.add_argument(
        "--fresh", action="store_true", help="Force a rebuild, ignoring cached graphs"
    )
    paper_parser.set_defaults(func=cmd_paper)

    # usage command
    usage_parser = subparsers.add_parser("usage", help="Show remaining API requests")
    usage_parser.set_defaults(func=cmd_usage)

    # free-papers command
    free_parser = subparsers.add_parser("free-papers", help="List free-access paper ids")
    free_parser.set_defaults(func=cmd_free_papers)

    # search command
    search_parser = subparsers.add_parser("search", help="Search Semantic Scholar for paper ids")
    search_parser.add_argument("query", help="Plain-text search query")
    search_parser.add_argument("--limit", type=int, default=10, help="Number of results (1-100)")
    search_parser.add_argument("--from-year", type=int, help="Earliest publication year")
    search_parser.add_argument("--to-year", type=int, help="Latest publication year")
    search_parser.set_defaults(func=cmd_search)

    # autocomplete command
    complete_parser = subparsers.add_parser(
        "autocomplete", help="Suggest papers for a partial query"
    )
    complete_parser.add_argument("query", help="Partial title or query")
    complete_parser.set_defaults(func=cmd_autocomplete)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(f"cli-{args.command}")

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
