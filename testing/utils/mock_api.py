"""In-process stand-in for the Connected Papers REST API."""

from typing import Any, Optional, Union

import httpx

from core.connected_papers import ConnectedPapersClient, ConnectedPapersConfig

BASE_URL = "https://cp.test/papers-api"

GraphReply = Union[dict[str, Any], httpx.Response, Exception]


class MockConnectedPapersAPI:
    """Routes client requests to scripted replies via httpx.MockTransport.

    Graph requests consume ``graph_replies`` in order: a dict is sent as a
    200 JSON body, an httpx.Response is sent as-is, an exception is raised
    from the transport.
    """

    def __init__(
        self,
        graph_replies: Optional[list[GraphReply]] = None,
        remaining: Any = 42,
        free_papers: Optional[list[str]] = None,
    ):
        self.graph_replies = list(graph_replies or [])
        self.remaining = remaining
        self.free_papers = free_papers if free_papers is not None else []
        self.requests: list[httpx.Request] = []

    @property
    def graph_paths(self) -> list[str]:
        return [r.url.path for r in self.requests if "/graph/" in r.url.path]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/papers-api")

        if path.startswith("/graph/"):
            if not self.graph_replies:
                return httpx.Response(500, text="no scripted reply")
            reply = self.graph_replies.pop(0)
            if isinstance(reply, Exception):
                raise reply
            if isinstance(reply, httpx.Response):
                return reply
            return httpx.Response(200, json=reply)

        if path == "/remaining-usages":
            return httpx.Response(200, json={"remaining": self.remaining})

        if path == "/free-access-papers":
            return httpx.Response(200, json={"papers": self.free_papers})

        return httpx.Response(404, text="not found")

    def client(self, api_key: str = "KEY", **config: Any) -> ConnectedPapersClient:
        """Client wired to this mock, polling without delay."""
        config.setdefault("poll_interval", 0.0)
        config.setdefault("base_url", BASE_URL)
        return ConnectedPapersClient(
            ConnectedPapersConfig(api_key=api_key, **config),
            transport=httpx.MockTransport(self.handler),
        )
