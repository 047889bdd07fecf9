"""Base interface for graph snapshot sources."""

from abc import ABC, abstractmethod

from .types import GraphSnapshot


class GraphFetcher(ABC):
    """Single-shot source of graph snapshots.

    A GraphRetrievalSession drives one of these in a loop; anything that can
    answer "current state of paper X's graph" in one round trip fits.
    """

    @abstractmethod
    async def fetch_graph(self, paper_id: str, fresh_only: bool = False) -> GraphSnapshot:
        """Fetch the current graph snapshot for a paper.

        Args:
            paper_id: Semantic Scholar paper id
            fresh_only: Force a rebuild, ignoring cached graphs

        Returns:
            GraphSnapshot as reported by the service

        Raises:
            ConnectedPapersError: The snapshot could not be obtained
        """
        pass
