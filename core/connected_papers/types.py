"""Type definitions for Connected Papers graph retrieval."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

# Graph payloads are passed through untouched; only presence matters here
Graph = dict[str, Any]


class GraphStatus(str, Enum):
    """Build status reported by the service for a graph request."""

    BAD_ID = "BAD_ID"
    ERROR = "ERROR"
    NOT_IN_DB = "NOT_IN_DB"
    OLD_GRAPH = "OLD_GRAPH"
    FRESH_GRAPH = "FRESH_GRAPH"
    IN_PROGRESS = "IN_PROGRESS"
    QUEUED = "QUEUED"
    BAD_TOKEN = "BAD_TOKEN"
    BAD_REQUEST = "BAD_REQUEST"
    OUT_OF_REQUESTS = "OUT_OF_REQUESTS"
    OVERLOADED = "OVERLOADED"

    @property
    def is_terminal(self) -> bool:
        """True if no further fetch can change the outcome."""
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset(
    {
        GraphStatus.BAD_ID,
        GraphStatus.ERROR,
        GraphStatus.NOT_IN_DB,
        GraphStatus.FRESH_GRAPH,
        GraphStatus.BAD_TOKEN,
        GraphStatus.BAD_REQUEST,
        GraphStatus.OUT_OF_REQUESTS,
    }
)


class GraphSnapshot(BaseModel):
    """One point-in-time answer to "what is the state of this paper's graph"."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status: GraphStatus
    graph: Optional[Graph] = Field(
        default=None,
        alias="graph_json",
        description="Graph payload (nodes, edges, metadata), if the service sent one",
    )
    progress: Optional[float] = Field(
        default=None, description="Build progress while IN_PROGRESS"
    )
    remaining_requests: Optional[int] = Field(
        default=None, ge=0, description="Requests left on the API key"
    )

    @property
    def has_graph(self) -> bool:
        return self.graph is not None

    def with_graph(self, graph: Optional[Graph]) -> "GraphSnapshot":
        """Copy of this snapshot carrying the given graph instead of its own."""
        return self.model_copy(update={"graph": graph})
