"""Compact views of graph snapshots for CLI and tool output.

Full graphs run to hundreds of nodes, far too much for a terminal line or
an LLM tool result. These helpers pull out counts, build parameters and the
start paper. Payloads are read leniently: missing or oddly-typed fields
become None rather than errors.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from .types import Graph, GraphSnapshot, GraphStatus


class PaperAuthor(BaseModel):
    name: str = "Unknown"
    ids: list[Any] = Field(default_factory=list)


class PaperDetails(BaseModel):
    """Headline fields of one paper node."""

    id: Optional[str] = None
    paper_id: Optional[str] = None
    title: Optional[str] = None
    authors: list[PaperAuthor] = Field(default_factory=list)
    year: Optional[int] = None
    venue: Optional[str] = None
    journal_name: Optional[str] = None
    doi: Optional[str] = None
    arxiv_id: Optional[str] = None
    pmid: Optional[str] = None
    abstract: Optional[str] = None
    url: Optional[str] = None
    is_open_access: Optional[bool] = None
    citations_length: Optional[int] = None
    references_length: Optional[int] = None


class GraphSummary(BaseModel):
    """Size and build parameters of a graph."""

    start_id: Optional[str] = None
    nodes_count: int = 0
    edges_count: int = 0
    citations_count: int = 0
    references_count: int = 0
    authors_count: int = 0
    parameters: dict[str, Any] = Field(default_factory=dict)
    current_corpus_date: Optional[str] = None
    creation_time: Optional[str] = None


class SnapshotSummary(BaseModel):
    """One snapshot, with the graph reduced to a summary."""

    status: GraphStatus
    progress: Optional[float] = None
    remaining_requests: Optional[int] = None
    graph: Optional[GraphSummary] = None
    start_paper: Optional[PaperDetails] = None


def _get(node: dict, *keys: str) -> Any:
    """First present value among snake_case / camelCase spellings."""
    for key in keys:
        if node.get(key) is not None:
            return node[key]
    return None


def _count(value: Any) -> int:
    return len(value) if isinstance(value, (list, dict)) else 0


def _opt_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _opt_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


def find_start_node(graph: Graph) -> Optional[dict]:
    """The node of the paper the graph was built around, if present."""
    start_id = graph.get("start_id")
    nodes = graph.get("nodes")
    if start_id is None or not nodes:
        return None
    if isinstance(nodes, dict):
        node = nodes.get(start_id)
        return node if isinstance(node, dict) else None
    if isinstance(nodes, list):
        for node in nodes:
            if isinstance(node, dict) and start_id in (node.get("id"), node.get("paperId")):
                return node
    return None


def paper_details(node: dict) -> PaperDetails:
    """Extract headline fields from a paper node."""
    authors = []
    for author in node.get("authors") or []:
        if isinstance(author, dict):
            authors.append(
                PaperAuthor(
                    name=author.get("name") or "Unknown",
                    ids=[i for i in author.get("ids") or [] if i is not None],
                )
            )
        elif isinstance(author, str):
            authors.append(PaperAuthor(name=author))

    is_oa = _get(node, "is_open_access", "isOpenAccess")
    return PaperDetails(
        id=_opt_str(node.get("id")),
        paper_id=_opt_str(_get(node, "paper_id", "paperId")),
        title=_opt_str(node.get("title")),
        authors=authors,
        year=_opt_int(node.get("year")),
        venue=_opt_str(node.get("venue")),
        journal_name=_opt_str(_get(node, "journal_name", "journalName")),
        doi=_opt_str(node.get("doi")),
        arxiv_id=_opt_str(_get(node, "arxiv_id", "arxivId")),
        pmid=_opt_str(node.get("pmid")),
        abstract=_opt_str(_get(node, "abstract", "paperAbstract")),
        url=_opt_str(node.get("url")),
        is_open_access=is_oa if isinstance(is_oa, bool) else None,
        citations_length=_opt_int(_get(node, "citations_length", "citationsLength")),
        references_length=_opt_int(_get(node, "references_length", "referencesLength")),
    )


def summarize_graph(graph: Graph) -> GraphSummary:
    """Counts and build parameters of a graph payload."""
    parameters = graph.get("parameters")
    return GraphSummary(
        start_id=_opt_str(graph.get("start_id")),
        nodes_count=_count(graph.get("nodes")),
        edges_count=_count(graph.get("edges")),
        citations_count=_count(graph.get("citations")),
        references_count=_count(graph.get("references")),
        authors_count=_count(graph.get("authors")),
        parameters=parameters if isinstance(parameters, dict) else {},
        current_corpus_date=_opt_str(graph.get("current_corpus_date")),
        creation_time=_opt_str(graph.get("creation_time")),
    )


def summarize_snapshot(snapshot: GraphSnapshot) -> SnapshotSummary:
    """Reduce a snapshot to status, progress and a graph summary."""
    summary = SnapshotSummary(
        status=snapshot.status,
        progress=snapshot.progress,
        remaining_requests=snapshot.remaining_requests,
    )
    if snapshot.graph is not None:
        summary.graph = summarize_graph(snapshot.graph)
        node = find_start_node(snapshot.graph)
        if node is not None:
            summary.start_paper = paper_details(node)
    return summary
