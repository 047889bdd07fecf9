"""Tests for the Connected Papers MCP tools."""

import json

import httpx
import pytest

from mcp_server import server
from mcp_server.errors import ServiceError, ToolError, ValidationError
from mcp_server.tools import account, graph, health, papers
from testing.utils import MockConnectedPapersAPI, MockSemanticScholarAPI, make_graph, make_paper


@pytest.fixture
def install_client(monkeypatch):
    """Install a mock-backed client as the server's client."""

    def _install(api: MockConnectedPapersAPI):
        client = api.client()
        monkeypatch.setattr(server, "_client", client)
        return client

    return _install


class TestToolListing:
    async def test_lists_all_tools(self):
        tools = await server.list_tools()

        assert sorted(t.name for t in tools) == [
            "account.free_access_papers",
            "account.remaining_usages",
            "graph.get",
            "graph.paper_info",
            "health.check",
            "papers.autocomplete",
            "papers.search",
        ]

    def test_graph_tools_require_id(self):
        for tool in graph.get_tools():
            assert tool.inputSchema["required"] == ["id"]


class TestGraphTools:
    async def test_get_graph(self, install_client):
        api = MockConnectedPapersAPI(
            [{"status": "IN_PROGRESS", "progress": 10.0}, {"status": "FRESH_GRAPH", "graph_json": make_graph()}]
        )
        install_client(api)

        result = await server.dispatch("graph.get", {"id": " abc "})

        assert result["status"] == "FRESH_GRAPH"
        assert result["snapshots_seen"] == 2
        assert result["graph"]["nodes_count"] == 3
        assert api.graph_paths[0] == "/papers-api/graph/0/abc"

    async def test_get_graph_no_wait(self, install_client):
        api = MockConnectedPapersAPI([{"status": "QUEUED"}])
        install_client(api)

        result = await server.dispatch("graph.get", {"id": "abc", "wait_until_complete": False})

        assert result == {"status": "QUEUED", "snapshots_seen": 1}

    async def test_get_graph_service_error(self, install_client):
        api = MockConnectedPapersAPI([httpx.Response(401, text="bad key")])
        install_client(api)

        with pytest.raises(ServiceError) as exc_info:
            await server.dispatch("graph.get", {"id": "abc"})

        assert exc_info.value.details["status_code"] == 401
        assert exc_info.value.details["operation"] == "get graph"

    async def test_paper_info(self, install_client):
        api = MockConnectedPapersAPI([{"status": "FRESH_GRAPH", "graph_json": make_graph()}])
        install_client(api)

        result = await server.dispatch("graph.paper_info", {"id": "abc"})

        assert result["title"] == "Paper 0 (v1)"
        assert result["year"] == 2000

    async def test_paper_info_without_graph(self, install_client):
        install_client(MockConnectedPapersAPI([{"status": "BAD_ID"}]))

        with pytest.raises(ToolError) as exc_info:
            await server.dispatch("graph.paper_info", {"id": "abc"})

        assert exc_info.value.message == "Graph not available. Status: BAD_ID"
        assert exc_info.value.details["status"] == "BAD_ID"

    @pytest.mark.parametrize(
        "arguments",
        [{}, {"id": ""}, {"id": "   "}, {"id": 42}, {"id": "abc", "fresh_only": "yes"}],
    )
    async def test_invalid_arguments(self, install_client, arguments):
        api = MockConnectedPapersAPI()
        install_client(api)

        with pytest.raises(ValidationError):
            await server.dispatch("graph.get", arguments)

        assert api.requests == []

    async def test_unknown_graph_tool(self, install_client):
        install_client(MockConnectedPapersAPI())

        with pytest.raises(ToolError, match="Unknown graph tool"):
            await server.dispatch("graph.nope", {"id": "abc"})


@pytest.fixture
def install_s2_client(monkeypatch):
    """Install a mock-backed Semantic Scholar client on the server."""

    def _install(api: MockSemanticScholarAPI):
        client = api.client()
        monkeypatch.setattr(server, "_s2_client", client)
        return client

    return _install


class TestPapersTools:
    async def test_search(self, install_s2_client):
        api = MockSemanticScholarAPI({"/paper/search": [{"total": 7, "data": [make_paper(2)]}]})
        install_s2_client(api)

        result = await server.dispatch("papers.search", {"query": " citation graphs ", "year_from": 2019})

        assert result["query"] == "citation graphs"
        assert result["total"] == 7
        assert result["papers"][0]["id"] == "0" * 39 + "2"
        assert result["papers"][0]["doi"] == "10.1000/2"
        assert api.params()["year"] == "2019-"
        assert api.params()["limit"] == "10"

    @pytest.mark.parametrize(
        "arguments",
        [{}, {"query": "  "}, {"query": "q", "limit": "ten"}, {"query": "q", "limit": 500}],
    )
    async def test_search_invalid_arguments(self, install_s2_client, arguments):
        api = MockSemanticScholarAPI()
        install_s2_client(api)

        with pytest.raises(ValidationError):
            await server.dispatch("papers.search", arguments)

        assert api.requests == []

    async def test_search_service_error(self, install_s2_client):
        install_s2_client(MockSemanticScholarAPI({"/paper/search": [httpx.Response(429, text="slow")]}))

        with pytest.raises(ServiceError) as exc_info:
            await server.dispatch("papers.search", {"query": "q"})

        assert exc_info.value.details["status_code"] == 429
        assert "SEMANTIC_SCHOLAR_API_KEY" in exc_info.value.message

    async def test_autocomplete(self, install_s2_client):
        api = MockSemanticScholarAPI(
            {"/paper/autocomplete": [{"matches": [{"id": "p1", "title": "T", "authorsYear": "A, 2020"}]}]}
        )
        install_s2_client(api)

        result = await server.dispatch("papers.autocomplete", {"query": "lit"})

        assert result == {
            "matches": [{"id": "p1", "title": "T", "authors_year": "A, 2020"}],
            "count": 1,
        }

    async def test_unknown_papers_tool(self):
        client = MockSemanticScholarAPI().client()

        with pytest.raises(ToolError, match="Unknown papers tool"):
            await papers.handle("papers.nope", {"query": "q"}, client)

    async def test_client_required(self, monkeypatch):
        monkeypatch.setattr(server, "_s2_client", None)

        with pytest.raises(ToolError, match="Semantic Scholar client not initialized"):
            await server.dispatch("papers.search", {"query": "q"})

class TestAccountTools:
    async def test_remaining_usages(self, install_client):
        install_client(MockConnectedPapersAPI(remaining=3))

        assert await server.dispatch("account.remaining_usages", {}) == {"remaining_usages": 3}

    async def test_free_access_papers(self, install_client):
        install_client(MockConnectedPapersAPI(free_papers=["a", "b"]))

        result = await server.dispatch("account.free_access_papers", {})

        assert result == {"free_access_papers": ["a", "b"], "count": 2}

    async def test_account_error(self):
        api = MockConnectedPapersAPI()
        client = api.client(base_url="https://cp.test/elsewhere")

        with pytest.raises(ServiceError) as exc_info:
            await account.handle("account.remaining_usages", {}, client)

        assert exc_info.value.details["status_code"] == 404


class TestHealthTool:
    async def test_healthy(self):
        client = MockConnectedPapersAPI(remaining=5).client()

        result = await health.handle("health.check", {}, client)

        assert result["overall_healthy"] is True
        assert result["connected_papers"]["remaining_usages"] == 5
        assert result["connected_papers"]["demo_token"] is False

    async def test_not_initialized(self):
        result = await health.handle("health.check", {}, None)

        assert result["overall_healthy"] is False
        assert result["connected_papers"]["error"] == "Not initialized"

    async def test_unreachable(self):
        client = MockConnectedPapersAPI().client(base_url="https://cp.test/elsewhere")

        result = await health.handle("health.check", {}, client)

        assert result["overall_healthy"] is False
        assert "HTTP 404" in result["connected_papers"]["error"]


class TestCallTool:
    async def test_result_is_json_text(self, install_client):
        install_client(MockConnectedPapersAPI(remaining=8))

        content = await server.call_tool("account.remaining_usages", {})

        assert json.loads(content[0].text) == {"remaining_usages": 8}

    async def test_tool_error_becomes_error_payload(self, install_client):
        install_client(MockConnectedPapersAPI())

        content = await server.call_tool("graph.get", {})

        payload = json.loads(content[0].text)
        assert payload["error"].startswith("Validation error for 'id'")
        assert payload["details"] == {"field": "id"}

    async def test_unknown_tool(self):
        content = await server.call_tool("nope.tool", {})

        assert "Unknown tool" in json.loads(content[0].text)["error"]

    async def test_client_required(self, monkeypatch):
        monkeypatch.setattr(server, "_client", None)

        content = await server.call_tool("account.remaining_usages", {})

        assert "not initialized" in json.loads(content[0].text)["error"]
