"""Tests for the Connected Papers HTTP client.

Requests go through httpx.MockTransport; pass --integration to also hit
the live API with the public TEST_TOKEN.
"""

import httpx
import pytest

from core.connected_papers import (
    ApiKeyNotFoundError,
    ConnectedPapersClient,
    ConnectedPapersConfig,
    ConnectedPapersError,
    GraphStatus,
    RequestFailedError,
    ResponseDecodeError,
    TransportError,
)
from testing.utils import MockConnectedPapersAPI, drain, make_graph

PAPER_ID = "abc"


class TestFetchGraph:
    async def test_request_shape(self):
        api = MockConnectedPapersAPI([{"status": "QUEUED"}, {"status": "QUEUED"}])
        async with api.client(api_key="SECRET") as client:
            await client.fetch_graph(PAPER_ID)
            await client.fetch_graph(PAPER_ID, fresh_only=True)

        assert api.graph_paths == [
            "/papers-api/graph/0/abc",
            "/papers-api/graph/1/abc",
        ]
        request = api.requests[0]
        assert request.method == "GET"
        assert request.headers["X-Api-Key"] == "SECRET"
        assert request.headers["User-Agent"].startswith("PY-connected-papers/")

    async def test_paper_id_is_escaped_in_path(self):
        api = MockConnectedPapersAPI([{"status": "QUEUED"}])
        async with api.client() as client:
            await client.fetch_graph("DOI:10.18653/v1/N18-3011")

        assert api.requests[0].url.raw_path == b"/papers-api/graph/0/DOI:10.18653%2Fv1%2FN18-3011"

    async def test_parses_snapshot(self):
        graph = make_graph()
        api = MockConnectedPapersAPI(
            [
                {
                    "status": "FRESH_GRAPH",
                    "graph_json": graph,
                    "progress": 100.0,
                    "remaining_requests": 7,
                }
            ]
        )
        async with api.client() as client:
            snapshot = await client.fetch_graph(PAPER_ID)

        assert snapshot.status is GraphStatus.FRESH_GRAPH
        assert snapshot.graph == graph
        assert snapshot.has_graph
        assert snapshot.progress == 100.0
        assert snapshot.remaining_requests == 7

    async def test_missing_fields_are_none(self):
        api = MockConnectedPapersAPI([{"status": "IN_PROGRESS"}])
        async with api.client() as client:
            snapshot = await client.fetch_graph(PAPER_ID)

        assert snapshot.status is GraphStatus.IN_PROGRESS
        assert snapshot.graph is None
        assert snapshot.progress is None
        assert snapshot.remaining_requests is None

    async def test_http_error_status(self):
        api = MockConnectedPapersAPI([httpx.Response(500, text="upstream down")])
        async with api.client() as client:
            with pytest.raises(RequestFailedError) as exc_info:
                await client.fetch_graph(PAPER_ID)

        assert exc_info.value.status_code == 500
        assert exc_info.value.body == "upstream down"

    async def test_invalid_json(self):
        api = MockConnectedPapersAPI([httpx.Response(200, text="<html>")])
        async with api.client() as client:
            with pytest.raises(ResponseDecodeError):
                await client.fetch_graph(PAPER_ID)

    async def test_unknown_status(self):
        api = MockConnectedPapersAPI([{"status": "SOMETHING_NEW"}])
        async with api.client() as client:
            with pytest.raises(ResponseDecodeError):
                await client.fetch_graph(PAPER_ID)

    async def test_connection_failure(self):
        api = MockConnectedPapersAPI([httpx.ConnectError("refused")])
        async with api.client() as client:
            with pytest.raises(TransportError, match="Connection failed"):
                await client.fetch_graph(PAPER_ID)

    async def test_timeout(self):
        api = MockConnectedPapersAPI([httpx.ReadTimeout("slow")])
        async with api.client() as client:
            with pytest.raises(TransportError, match="timeout"):
                await client.fetch_graph(PAPER_ID)


class TestAccountEndpoints:
    async def test_remaining_usages(self):
        api = MockConnectedPapersAPI(remaining=12)
        async with api.client() as client:
            assert await client.get_remaining_usages() == 12

        assert api.requests[0].url.path == "/papers-api/remaining-usages"

    @pytest.mark.parametrize("value", [None, "many", -3])
    async def test_remaining_usages_defaults_to_zero(self, value):
        api = MockConnectedPapersAPI(remaining=value)
        async with api.client() as client:
            assert await client.get_remaining_usages() == 0

    async def test_free_access_papers(self):
        api = MockConnectedPapersAPI(free_papers=["p1", "p2"])
        async with api.client() as client:
            assert await client.get_free_access_papers() == ["p1", "p2"]

        assert api.requests[0].url.path == "/papers-api/free-access-papers"

    async def test_free_access_papers_empty(self):
        api = MockConnectedPapersAPI()
        async with api.client() as client:
            assert await client.get_free_access_papers() == []


class TestRetrieval:
    async def test_stream_follows_build(self):
        graph = make_graph()
        api = MockConnectedPapersAPI(
            [
                {"status": "OLD_GRAPH", "graph_json": graph},
                {"status": "IN_PROGRESS", "progress": 50.0},
                {"status": "FRESH_GRAPH", "graph_json": graph},
            ]
        )
        async with api.client() as client:
            async with client.stream_graph(PAPER_ID) as session:
                items = await drain(session)

        assert [item.status for item in items] == [
            GraphStatus.OLD_GRAPH,
            GraphStatus.IN_PROGRESS,
            GraphStatus.FRESH_GRAPH,
        ]
        assert items[1].graph == graph
        assert api.graph_paths == [
            "/papers-api/graph/0/abc",
            "/papers-api/graph/1/abc",
            "/papers-api/graph/1/abc",
        ]

    async def test_stream_retries_overload(self):
        api = MockConnectedPapersAPI(
            [{"status": "OVERLOADED"}, {"status": "OVERLOADED"}, {"status": "FRESH_GRAPH"}]
        )
        async with api.client(overload_retry_delays=(0.0, 0.0, 0.0, 0.0)) as client:
            items = await drain(client.stream_graph(PAPER_ID, wait_until_complete=False))

        assert [item.status for item in items] == [GraphStatus.FRESH_GRAPH]
        assert len(api.graph_paths) == 3

    async def test_stream_yields_error_item(self):
        api = MockConnectedPapersAPI(
            [{"status": "QUEUED"}, httpx.Response(503, text="busy")]
        )
        async with api.client() as client:
            items = await drain(client.stream_graph(PAPER_ID))

        assert items[0].status is GraphStatus.QUEUED
        assert isinstance(items[1], RequestFailedError)
        assert items[1].status_code == 503

    async def test_get_graph_returns_last_snapshot(self):
        api = MockConnectedPapersAPI(
            [{"status": "QUEUED"}, {"status": "FRESH_GRAPH", "graph_json": make_graph()}]
        )
        async with api.client() as client:
            snapshot = await client.get_graph(PAPER_ID, wait_until_complete=True)

        assert snapshot.status is GraphStatus.FRESH_GRAPH
        assert snapshot.has_graph

    async def test_get_graph_report_mode(self):
        api = MockConnectedPapersAPI([{"status": "QUEUED"}])
        async with api.client() as client:
            snapshot = await client.get_graph(PAPER_ID)

        assert snapshot.status is GraphStatus.QUEUED
        assert len(api.graph_paths) == 1

    async def test_get_graph_raises_on_failure(self):
        api = MockConnectedPapersAPI([httpx.ConnectError("refused")])
        async with api.client() as client:
            with pytest.raises(ConnectedPapersError):
                await client.get_graph(PAPER_ID)


class TestConfig:
    def test_defaults(self):
        config = ConnectedPapersConfig()

        assert config.api_key == "TEST_TOKEN"
        assert config.uses_demo_token
        assert config.base_url == "https://rest.prod.connectedpapers.com/papers-api"
        assert config.poll_interval == 1.0
        assert config.overload_retry_delays == (5.0, 10.0, 20.0, 40.0)

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("CONNECTED_PAPERS_API_KEY", "ENV_KEY")
        monkeypatch.setenv("CONNECTED_PAPERS_TIMEOUT", "15")

        config = ConnectedPapersConfig()

        assert config.api_key == "ENV_KEY"
        assert config.timeout == 15.0
        assert not config.uses_demo_token

    def test_from_env_requires_key(self):
        with pytest.raises(ApiKeyNotFoundError) as exc_info:
            ConnectedPapersClient.from_env()

        assert exc_info.value.env_var == "CONNECTED_PAPERS_API_KEY"

    def test_from_env_with_key(self, monkeypatch):
        monkeypatch.setenv("CONNECTED_PAPERS_API_KEY", "ENV_KEY")

        client = ConnectedPapersClient.from_env()

        assert client.headers["X-Api-Key"] == "ENV_KEY"

    def test_with_api_key(self):
        client = ConnectedPapersClient.with_api_key("K")

        assert client.headers["X-Api-Key"] == "K"
        assert client.config.api_key == "K"


@pytest.mark.integration
async def test_live_free_access_graph():
    """Fetch a free-access graph from the live service with TEST_TOKEN."""
    async with ConnectedPapersClient(ConnectedPapersConfig()) as client:
        papers = await client.get_free_access_papers()
        assert papers

        snapshot = await client.get_graph(papers[0], wait_until_complete=True)

    assert snapshot.status in (GraphStatus.FRESH_GRAPH, GraphStatus.OLD_GRAPH)
    assert snapshot.has_graph
