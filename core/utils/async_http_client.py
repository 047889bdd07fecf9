"""Lazily-opened async HTTP client base and a process-wide cleanup registry."""

import logging
from typing import Awaitable, Callable, Optional

import httpx

from .async_context import AsyncContextManager

logger = logging.getLogger(__name__)

# Shared-client closers, keyed by client name; insertion order is close order
_cleanup_registry: dict[str, Callable[[], Awaitable[None]]] = {}


def register_cleanup(name: str, closer: Callable[[], Awaitable[None]]) -> None:
    """Register a shared client's closer for shutdown. Re-registering a name is a no-op."""
    _cleanup_registry.setdefault(name, closer)


async def cleanup_all_clients() -> None:
    """Close every registered shared client, logging (not raising) failures."""
    for name, closer in list(_cleanup_registry.items()):
        try:
            await closer()
        except Exception as e:
            logger.warning(f"Error closing {name} client: {e}")


class BaseAsyncHttpClient(AsyncContextManager):
    """
    Async HTTP client whose httpx pool opens on first request.

    Subclasses call ``await self._get_client()`` for each request; a closed
    pool is reopened transparently, so an instance survives ``close()``.

    Args:
        base_url: Root URL that request paths are joined onto
        timeout: Request timeout in seconds
        headers: Headers sent with every request
        transport: Alternative transport (e.g. ``httpx.MockTransport``)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        headers: Optional[dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = dict(headers or {})
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def is_open(self) -> bool:
        return self._client is not None and not self._client.is_closed

    def _build_client(self) -> httpx.AsyncClient:
        logger.debug(f"Opening HTTP client for {self.base_url}")
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self.headers,
            transport=self._transport,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        if not self.is_open:
            self._client = self._build_client()
        return self._client

    async def close(self) -> None:
        """Close the connection pool, if one is open."""
        if self.is_open:
            await self._client.aclose()
        self._client = None
