"""Async HTTP client for the Semantic Scholar Graph API.

API root: https://api.semanticscholar.org/graph/v1
Auth: optional x-api-key header (SEMANTIC_SCHOLAR_API_KEY); without a key
requests share the public rate limit.
"""

import logging
from typing import Any, AsyncIterator, Iterable, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from core.connected_papers.client import USER_AGENT
from core.utils.async_http_client import BaseAsyncHttpClient, register_cleanup
from core.utils.http_errors import safe_http_request

from .config import SemanticScholarConfig, get_semantic_scholar_config
from .errors import (
    InvalidParameterError,
    S2RequestFailedError,
    S2ResponseDecodeError,
    S2TransportError,
)
from .models import AutocompletePaper, MatchedPaper, Paper, PaperBulkSearchResponse, PaperSearchResponse
from .queries import QueryNode, SearchFilters, Sort
from .types import BULK_UNSUPPORTED_FIELDS, PaperField, PaperId, join_values

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

AUTOCOMPLETE_MAX_CHARS = 100
SEARCH_MAX_LIMIT = 100
# Relevance search never pages past this many results
SEARCH_MAX_RESULTS = 1000
BATCH_MAX_IDS = 500


class SemanticScholarClient(BaseAsyncHttpClient):
    """
    Async Semantic Scholar Graph API client.

    Example:
        async with SemanticScholarClient() as client:
            matches = await client.autocomplete("literature graph")
            page = await client.search("citation graph", limit=20)
            paper = await client.get_paper(PaperId.doi("10.18653/v1/N18-3011"))
    """

    def __init__(
        self,
        config: Optional[SemanticScholarConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._config = config or get_semantic_scholar_config()
        headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
        if self._config.api_key:
            headers["x-api-key"] = self._config.api_key
        super().__init__(
            base_url=self._config.base_url,
            timeout=self._config.timeout,
            headers=headers,
            transport=transport,
        )

    @property
    def config(self) -> SemanticScholarConfig:
        return self._config

    @classmethod
    def with_api_key(cls, api_key: str, **kwargs: Any) -> "SemanticScholarClient":
        """Create a client using the given API key and default settings."""
        return cls(SemanticScholarConfig(api_key=api_key), **kwargs)

    @classmethod
    def from_env(cls, **kwargs: Any) -> "SemanticScholarClient":
        """Create a client from SEMANTIC_SCHOLAR_API_KEY.

        Raises:
            S2ApiKeyNotFoundError: The variable is not set
        """
        return cls(SemanticScholarConfig.from_env(), **kwargs)

    async def _request(
        self,
        method: str,
        path: str,
        not_found_ok: bool = False,
        **kwargs: Any,
    ) -> Any:
        """Send a request and decode its JSON body.

        Returns None for a 404 when ``not_found_ok`` is set.
        """
        client = await self._get_client()
        logger.debug(f"{method} {path} {kwargs.get('params') or ''}")
        try:
            response = await safe_http_request(
                client,
                method,
                path,
                error_class=S2RequestFailedError,
                transport_error_class=S2TransportError,
                **kwargs,
            )
        except S2RequestFailedError as e:
            if not_found_ok and e.status_code == 404:
                return None
            raise
        try:
            return response.json()
        except ValueError as e:
            raise S2ResponseDecodeError(
                f"Invalid JSON from {path}: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e

    @staticmethod
    def _decode(model: Type[ModelT], data: Any, what: str) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise S2ResponseDecodeError(f"Unexpected {what} response: {e}") from e

    @staticmethod
    def _field_params(fields: Optional[Iterable[PaperField]]) -> dict[str, str]:
        joined = join_values(fields or [])
        return {"fields": joined} if joined else {}

    async def autocomplete(self, query: str) -> list[AutocompletePaper]:
        """Suggest papers completing a partial query (first 100 characters used)."""
        data = await self._request(
            "GET",
            "/paper/autocomplete",
            params={"query": query[:AUTOCOMPLETE_MAX_CHARS]},
        )
        if not isinstance(data, dict):
            raise S2ResponseDecodeError(f"Unexpected autocomplete response: {data!r}")
        return [
            self._decode(AutocompletePaper, match, "autocomplete")
            for match in data.get("matches") or []
        ]

    async def search(
        self,
        query: str,
        fields: Optional[Iterable[PaperField]] = None,
        filters: Optional[SearchFilters] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> PaperSearchResponse:
        """Relevance-ranked paper search.

        Plain-text query, no special syntax. At most 1,000 results can be
        paged through; use search_bulk for more.

        Raises:
            InvalidParameterError: limit outside 1-100, or paging past 1,000
        """
        if not 1 <= limit <= SEARCH_MAX_LIMIT:
            raise InvalidParameterError(f"limit must be between 1 and {SEARCH_MAX_LIMIT}")
        if offset < 0 or offset + limit > SEARCH_MAX_RESULTS:
            raise InvalidParameterError(
                f"offset + limit must be within the first {SEARCH_MAX_RESULTS} results"
            )

        params = {"query": query, "offset": str(offset), "limit": str(limit)}
        params.update(self._field_params(fields))
        if filters:
            params.update(filters.to_params())

        data = await self._request("GET", "/paper/search", params=params)
        result = self._decode(PaperSearchResponse, data, "search")
        logger.debug(f"search '{query}' returned {len(result.data)} of {result.total}")
        return result

    async def search_bulk(
        self,
        query: str | QueryNode = "",
        fields: Optional[Iterable[PaperField]] = None,
        filters: Optional[SearchFilters] = None,
        token: Optional[str] = None,
        sort: Optional[Sort] = None,
    ) -> PaperBulkSearchResponse:
        """Bulk paper search: up to 1,000 papers per call, no relevance ranking.

        The query may use boolean syntax (see queries.QueryNode). Pass the
        returned token back to fetch the next batch.

        Raises:
            InvalidParameterError: A nested field (citations, references,
                embedding, tldr) was requested
        """
        fields = list(fields or [])
        unsupported = [f.value for f in fields if f in BULK_UNSUPPORTED_FIELDS]
        if unsupported:
            raise InvalidParameterError(
                f"{', '.join(unsupported)} not supported by bulk search"
            )

        params = {"query": str(query)}
        params.update(self._field_params(fields))
        if filters:
            params.update(filters.to_params())
        if token:
            params["token"] = token
        if sort:
            params["sort"] = str(sort)

        data = await self._request("GET", "/paper/search/bulk", params=params)
        return self._decode(PaperBulkSearchResponse, data, "bulk search")

    async def iter_search_bulk(
        self,
        query: str | QueryNode = "",
        fields: Optional[Iterable[PaperField]] = None,
        filters: Optional[SearchFilters] = None,
        sort: Optional[Sort] = None,
        max_papers: Optional[int] = None,
    ) -> AsyncIterator[Paper]:
        """Yield bulk search results across batches, following continuation tokens."""
        fields = list(fields or [])
        token: Optional[str] = None
        yielded = 0
        while True:
            batch = await self.search_bulk(query, fields, filters, token, sort)
            for paper in batch.data:
                if max_papers is not None and yielded >= max_papers:
                    return
                yield paper
                yielded += 1
            if not batch.token or not batch.data:
                return
            token = batch.token

    async def search_title(
        self,
        title: str,
        fields: Optional[Iterable[PaperField]] = None,
        filters: Optional[SearchFilters] = None,
    ) -> Optional[MatchedPaper]:
        """Find the single paper whose title best matches, or None."""
        params = {"query": title}
        params.update(self._field_params(fields))
        if filters:
            params.update(filters.to_params())

        data = await self._request("GET", "/paper/search/match", not_found_ok=True, params=params)
        if data is None:
            logger.debug(f"No title match for '{title}'")
            return None
        if not isinstance(data, dict):
            raise S2ResponseDecodeError(f"Unexpected title match response: {data!r}")

        matches = data.get("data") or []
        if not matches:
            return None
        best = dict(matches[0])
        score = best.pop("matchScore", 0.0)
        return self._decode(MatchedPaper, {"score": score, "paper": best}, "title match")

    async def get_paper(
        self,
        paper_id: PaperId | str,
        fields: Optional[Iterable[PaperField]] = None,
    ) -> Optional[Paper]:
        """Look up one paper by any supported identifier; None if unknown."""
        path = f"/paper/{quote(str(paper_id), safe=':')}"
        data = await self._request(
            "GET", path, not_found_ok=True, params=self._field_params(fields)
        )
        if data is None:
            logger.debug(f"Paper {paper_id} not found")
            return None
        return self._decode(Paper, data, "paper")

    async def get_papers_batch(
        self,
        paper_ids: Iterable[PaperId | str],
        fields: Optional[Iterable[PaperField]] = None,
    ) -> list[Optional[Paper]]:
        """Look up several papers in one request.

        Results line up with ``paper_ids``; unknown ids give None.

        Raises:
            InvalidParameterError: No ids, or more than 500
        """
        ids = [str(paper_id) for paper_id in paper_ids]
        if not ids:
            raise InvalidParameterError("at least one paper id is required")
        if len(ids) > BATCH_MAX_IDS:
            raise InvalidParameterError(f"at most {BATCH_MAX_IDS} ids per batch")

        data = await self._request(
            "POST", "/paper/batch", params=self._field_params(fields), json={"ids": ids}
        )
        if not isinstance(data, list):
            raise S2ResponseDecodeError(f"Unexpected batch response: {data!r}")
        return [None if item is None else self._decode(Paper, item, "batch") for item in data]


# Module singleton
_client: SemanticScholarClient | None = None


def get_semantic_scholar_client() -> SemanticScholarClient:
    """Get global SemanticScholarClient instance."""
    global _client
    if _client is None:
        _client = SemanticScholarClient()
        register_cleanup("SemanticScholarClient", _close_semantic_scholar_client)
    return _client


async def _close_semantic_scholar_client() -> None:
    """Close the global SemanticScholarClient."""
    global _client
    if _client:
        await _client.close()
        _client = None
