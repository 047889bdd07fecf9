"""Polling session that follows a graph build to its outcome.

The service builds graphs in the background, so a single request often
answers QUEUED or IN_PROGRESS, or hands back a cached OLD_GRAPH. A
GraphRetrievalSession keeps asking until the answer settles and yields
every intermediate snapshot on the way:

    OLD_GRAPH      -> when waiting, switch to fresh requests (once) and poll
                      again; otherwise the old graph is the answer
    OVERLOADED     -> retry after 5, 10, 20, 40 seconds, then carry on with
                      whatever the last attempt returned
    QUEUED,
    IN_PROGRESS    -> poll again after the poll interval when waiting
    anything else  -> terminal, stop

Emitted snapshots always carry the most recent graph seen so far, so a
consumer never loses a graph once one has arrived. A failed request ends
the session: the ConnectedPapersError is yielded as the last item instead
of being raised, and nothing is retried.

Usage:
    async with client.stream_graph(paper_id) as session:
        async for item in session:
            if isinstance(item, ConnectedPapersError):
                ...
            else:
                print(item.status, item.progress)

Sessions are forward-only: once exhausted or closed they yield nothing.
Start a new one to ask again.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import AsyncIterator, Awaitable, Callable, Optional, Sequence, Union

from core.utils.async_context import AsyncContextManager
from core.utils.retry import retry_on_result

from .base import GraphFetcher
from .config import OVERLOAD_RETRY_DELAYS
from .errors import ConnectedPapersError
from .types import Graph, GraphSnapshot, GraphStatus

logger = logging.getLogger(__name__)

POLL_INTERVAL = 1.0

SessionItem = Union[GraphSnapshot, ConnectedPapersError]


@dataclass
class SessionState:
    """Mutable state owned by a single session."""

    paper_id: str
    wait_until_complete: bool
    # Starts at the caller's fresh_only; flipped to True at most once
    fresh_request: bool
    last_known_graph: Optional[Graph] = None
    fetch_count: int = 0

    def remember(self, snapshot: GraphSnapshot) -> GraphSnapshot:
        if snapshot.graph is not None:
            self.last_known_graph = snapshot.graph
        return snapshot

    def merged(self, snapshot: GraphSnapshot) -> GraphSnapshot:
        """The snapshot as emitted: carrying the best graph seen so far."""
        return snapshot.with_graph(self.last_known_graph)


class GraphRetrievalSession(AsyncContextManager):
    """Async iterator over the snapshots of one graph retrieval.

    Args:
        fetcher: Source of single snapshots (usually ConnectedPapersClient)
        paper_id: Semantic Scholar paper id; validity is the service's call
        fresh_only: Ask for a rebuild that ignores cached graphs from the
            first request on
        wait_until_complete: Keep polling until a terminal status. When
            False, report the first answer (after overload retries) and stop.
        poll_interval: Seconds between polls
        overload_delays: Seconds to wait before each OVERLOADED retry
        sleep: Awaitable sleep, replaceable for tests
    """

    def __init__(
        self,
        fetcher: GraphFetcher,
        paper_id: str,
        fresh_only: bool = False,
        wait_until_complete: bool = True,
        poll_interval: float = POLL_INTERVAL,
        overload_delays: Sequence[float] = OVERLOAD_RETRY_DELAYS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._fetcher = fetcher
        self.state = SessionState(
            paper_id=paper_id,
            wait_until_complete=wait_until_complete,
            fresh_request=fresh_only,
        )
        self.poll_interval = poll_interval
        self.overload_delays = tuple(overload_delays)
        self._sleep = sleep
        self._stop_requested = False
        self._items = self._run()

    @property
    def stop_requested(self) -> bool:
        return self._stop_requested

    def __aiter__(self) -> "GraphRetrievalSession":
        return self

    async def __anext__(self) -> SessionItem:
        if self._stop_requested:
            await self._items.aclose()
            raise StopAsyncIteration
        return await self._items.__anext__()

    def stop(self) -> None:
        """Ask the session to wind down.

        Safe to call from another task. A request or sleep already under way
        completes, but no new one starts and nothing more is yielded.
        """
        if not self._stop_requested:
            logger.debug(f"Stop requested for {self.state.paper_id}")
            self._stop_requested = True

    async def close(self) -> None:
        """Stop the session and finalize it. Must not race an active __anext__."""
        self.stop()
        await self._items.aclose()

    async def _fetch(self) -> GraphSnapshot:
        state = self.state
        state.fetch_count += 1
        snapshot = await self._fetcher.fetch_graph(state.paper_id, state.fresh_request)
        return state.remember(snapshot)

    def _should_retry_overload(self, snapshot: GraphSnapshot) -> bool:
        return snapshot.status is GraphStatus.OVERLOADED and not self._stop_requested

    async def _run(self) -> AsyncIterator[SessionItem]:
        state = self.state
        paper_id = state.paper_id

        while not self._stop_requested:
            try:
                snapshot = await self._fetch()
            except ConnectedPapersError as e:
                logger.error(f"Graph request for {paper_id} failed: {e}")
                yield e
                return

            if snapshot.status is GraphStatus.OLD_GRAPH:
                escalate = state.wait_until_complete and not state.fresh_request
                if escalate:
                    logger.info(f"Old graph for {paper_id}, requesting a fresh build")
                    state.fresh_request = True
                else:
                    logger.info(f"Accepting old graph for {paper_id}")

                yield state.merged(snapshot)
                if not escalate:
                    return
                await self._sleep(self.poll_interval)
                continue

            if snapshot.status is GraphStatus.OVERLOADED:
                logger.warning(
                    f"Service overloaded for {paper_id}, retrying up to "
                    f"{len(self.overload_delays)} times"
                )
                try:
                    snapshot = await retry_on_result(
                        self._fetch,
                        snapshot,
                        self._should_retry_overload,
                        self.overload_delays,
                        sleep=self._sleep,
                    )
                except ConnectedPapersError as e:
                    logger.error(f"Graph request for {paper_id} failed during overload retry: {e}")
                    yield e
                    return
                if self._stop_requested:
                    return
                if snapshot.status is GraphStatus.OVERLOADED:
                    logger.warning(f"Still overloaded for {paper_id} after all retries")

            yield state.merged(snapshot)

            if snapshot.status.is_terminal:
                logger.info(f"Graph {paper_id} finished with {snapshot.status.value}")
                return
            if not state.wait_until_complete:
                return
            await self._sleep(self.poll_interval)


def retrieve(
    fetcher: GraphFetcher,
    paper_id: str,
    fresh_only: bool = False,
    wait_until_complete: bool = True,
    **kwargs,
) -> GraphRetrievalSession:
    """Start an independent retrieval session for one paper.

    Extra keyword arguments are passed to GraphRetrievalSession.
    """
    return GraphRetrievalSession(
        fetcher,
        paper_id,
        fresh_only=fresh_only,
        wait_until_complete=wait_until_complete,
        **kwargs,
    )
