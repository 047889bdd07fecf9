"""Async HTTP client for the Connected Papers REST API.

API root: https://rest.prod.connectedpapers.com/papers-api
Auth: X-Api-Key header (TEST_TOKEN works for free-access papers)

Graph endpoints are asynchronous on the service side: a request may
answer QUEUED / IN_PROGRESS while the graph builds. fetch_graph() makes a
single request; stream_graph() and get_graph() wrap it in a
GraphRetrievalSession that polls until the build settles.
"""

import logging
from importlib.metadata import PackageNotFoundError, version
from typing import Any, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from core.utils.async_http_client import BaseAsyncHttpClient, register_cleanup
from core.utils.http_errors import safe_http_request

from .base import GraphFetcher
from .config import ConnectedPapersConfig, get_connected_papers_config
from .errors import ConnectedPapersError, RequestFailedError, ResponseDecodeError, TransportError
from .session import GraphRetrievalSession
from .types import GraphSnapshot

logger = logging.getLogger(__name__)

try:
    _VERSION = version("connected-papers")
except PackageNotFoundError:
    _VERSION = "0.0.0"

USER_AGENT = f"PY-connected-papers/{_VERSION}"


class ConnectedPapersClient(BaseAsyncHttpClient, GraphFetcher):
    """
    Async Connected Papers client.

    Example:
        async with ConnectedPapersClient() as client:
            # One request, whatever state the graph is in
            snapshot = await client.fetch_graph("9397e7acd062245d37350f5c05faf56e9cfae0d6")

            # Poll until the graph is built, seeing each intermediate state
            async with client.stream_graph(paper_id) as session:
                async for item in session:
                    ...

            remaining = await client.get_remaining_usages()
    """

    def __init__(
        self,
        config: Optional[ConnectedPapersConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._config = config or get_connected_papers_config()
        super().__init__(
            base_url=self._config.base_url,
            timeout=self._config.timeout,
            headers={
                "X-Api-Key": self._config.api_key,
                "User-Agent": USER_AGENT,
                "Accept": "application/json",
            },
            transport=transport,
        )

    @property
    def config(self) -> ConnectedPapersConfig:
        return self._config

    @classmethod
    def with_api_key(cls, api_key: str, **kwargs: Any) -> "ConnectedPapersClient":
        """Create a client using the given API key and default settings."""
        return cls(ConnectedPapersConfig(api_key=api_key), **kwargs)

    @classmethod
    def from_env(cls, **kwargs: Any) -> "ConnectedPapersClient":
        """Create a client from CONNECTED_PAPERS_API_KEY.

        Raises:
            ApiKeyNotFoundError: The variable is not set
        """
        return cls(ConnectedPapersConfig.from_env(), **kwargs)

    async def _get_json(self, path: str) -> Any:
        """GET a path and decode its JSON body, mapping every failure."""
        client = await self._get_client()
        logger.debug(f"GET {path}")
        response = await safe_http_request(
            client,
            "GET",
            path,
            error_class=RequestFailedError,
            transport_error_class=TransportError,
        )
        try:
            return response.json()
        except ValueError as e:
            raise ResponseDecodeError(
                f"Invalid JSON from {path}: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e

    async def fetch_graph(self, paper_id: str, fresh_only: bool = False) -> GraphSnapshot:
        """Fetch the current graph snapshot for a paper (one request)."""
        data = await self._get_json(f"/graph/{int(fresh_only)}/{quote(paper_id, safe=':')}")
        try:
            snapshot = GraphSnapshot.model_validate(data)
        except ValidationError as e:
            raise ResponseDecodeError(f"Unexpected graph response for {paper_id}: {e}") from e

        logger.debug(
            f"Graph {paper_id} (fresh_only={fresh_only}): {snapshot.status.value}"
            f"{'' if snapshot.progress is None else f' progress={snapshot.progress}'}"
        )
        return snapshot

    async def get_remaining_usages(self) -> int:
        """Number of graph requests left on the API key."""
        data = await self._get_json("/remaining-usages")
        if not isinstance(data, dict):
            raise ResponseDecodeError(f"Unexpected remaining-usages response: {data!r}")
        remaining = data.get("remaining")
        return remaining if isinstance(remaining, int) and remaining >= 0 else 0

    async def get_free_access_papers(self) -> list[str]:
        """Paper ids whose graphs can be fetched without a paid API key."""
        data = await self._get_json("/free-access-papers")
        if not isinstance(data, dict):
            raise ResponseDecodeError(f"Unexpected free-access-papers response: {data!r}")
        return [paper for paper in data.get("papers") or [] if isinstance(paper, str)]

    def stream_graph(
        self,
        paper_id: str,
        fresh_only: bool = False,
        wait_until_complete: bool = True,
    ) -> GraphRetrievalSession:
        """Start a polling session yielding each snapshot as the graph builds.

        Items are GraphSnapshot values, or a single ConnectedPapersError as
        the last item if a request fails.
        """
        return GraphRetrievalSession(
            self,
            paper_id,
            fresh_only=fresh_only,
            wait_until_complete=wait_until_complete,
            poll_interval=self._config.poll_interval,
            overload_delays=self._config.overload_retry_delays,
        )

    async def get_graph(
        self,
        paper_id: str,
        fresh_only: bool = False,
        wait_until_complete: bool = False,
    ) -> GraphSnapshot:
        """Run a retrieval session to the end and return its final snapshot.

        Raises:
            ConnectedPapersError: The session ended with a failed request
        """
        last: GraphSnapshot | None = None
        async with self.stream_graph(paper_id, fresh_only, wait_until_complete) as session:
            async for item in session:
                if isinstance(item, ConnectedPapersError):
                    raise item
                last = item
        if last is None:
            raise ConnectedPapersError(f"No response received for {paper_id}")
        return last


# Module singleton
_client: ConnectedPapersClient | None = None


def get_connected_papers_client() -> ConnectedPapersClient:
    """Get global ConnectedPapersClient instance."""
    global _client
    if _client is None:
        _client = ConnectedPapersClient()
        register_cleanup("ConnectedPapersClient", _close_connected_papers_client)
    return _client


async def _close_connected_papers_client() -> None:
    """Close the global ConnectedPapersClient."""
    global _client
    if _client:
        await _client.close()
        _client = None
