"""Fess HTTP client implementing SearchBackend over ``/api/v1/documents``."""

from __future__ import annotations

import gc
import sys
from typing import TYPE_CHECKING, Any

import httpx

from fess_mcp.errors import BackendError
from fess_mcp.search.backend import (
    FacetField,
    FacetResponse,
    IndexStats,
    MemorySnapshot,
    Pagination,
    SearchResult,
)
from fess_mcp.search.params import CONDITIONS_KEY, EXTRA_QUERIES_KEY, FIELDS_KEY, SearchInvocationParams

if TYPE_CHECKING:
    from fess_mcp.config import McpSettings

DOCUMENTS_PATH = "/api/v1/documents"
MATCH_ALL_QUERY = "*:*"


class FessClient:
    """Async context manager talking to a Fess server.

    Satisfies the :class:`~fess_mcp.search.backend.SearchBackend` protocol.

    Usage::

        async with FessClient(settings) as client:
            result = await client.search(params)
            stats = await client.get_index_stats()
    """

    def __init__(self, settings: McpSettings, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._settings = settings
        self._base_url = settings.fess_url.rstrip("/")
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> FessClient:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._settings.request_timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *_: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "FessClient must be used as an async context manager"
            raise RuntimeError(msg)
        return self._client

    async def search(self, params: SearchInvocationParams) -> SearchResult:
        """GET ``/api/v1/documents`` and parse the response into a :class:`SearchResult`."""
        data = await self._get_json(DOCUMENTS_PATH, to_query_params(params))
        return parse_search_response(data)

    async def get_index_stats(self) -> IndexStats:
        """Count documents with a match-all query and report server settings."""
        probe = SearchInvocationParams(query=MATCH_ALL_QUERY, page_size=1)
        result = await self.search(probe)
        return IndexStats(
            document_count=result.pagination.record_count,
            max_page_size=self._settings.max_page_size,
            default_page_size=self._settings.default_page_size,
            server_name=self._settings.server_name,
            server_version=self._settings.server_version,
            memory_snapshot=memory_snapshot(),
        )

    async def _get_json(self, path: str, query: list[tuple[str, str]]) -> dict[str, Any]:
        try:
            response = await self._http().get(path, params=query)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise BackendError(str(exc)) from exc
        try:
            data = response.json()
        except ValueError as exc:
            raise BackendError(f"Invalid JSON from {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise BackendError(f"Unexpected response from {path}")
        return data


def to_query_params(params: SearchInvocationParams) -> list[tuple[str, str]]:
    """Flatten *params* into Fess query-string pairs (repeated keys for lists)."""
    query: list[tuple[str, str]] = []
    if params.query is not None:
        query.append(("q", params.query))
    query.append(("start", str(params.start)))
    query.append(("offset", str(params.offset)))
    query.append(("num", str(params.page_size)))
    if params.sort:
        query.append(("sort", params.sort))
    query.extend(("lang", lang) for lang in params.languages)
    for name, values in params.fields.items():
        query.extend((f"{FIELDS_KEY}.{name}", v) for v in values)
    for name, values in params.conditions.items():
        query.extend((f"{CONDITIONS_KEY}.{name}", v) for v in values)
    if params.extra_queries is not None:
        query.extend((EXTRA_QUERIES_KEY, q) for q in params.extra_queries)
    if params.similar_doc_hash:
        query.append(("sdh", params.similar_doc_hash))
    return query


def parse_search_response(data: dict[str, Any]) -> SearchResult:
    """Map a Fess ``/api/v1/documents`` response body onto :class:`SearchResult`."""
    facets = FacetResponse(
        fields=[
            FacetField(
                name=str(field.get("name", "")),
                value_count_map={str(r.get("value")): int(r.get("count") or 0) for r in field.get("result", [])},
            )
            for field in data.get("facet_field") or []
        ],
        query_count_map={str(r.get("value")): int(r.get("count") or 0) for r in data.get("facet_query") or []},
    )

    return SearchResult(
        query=data.get("q"),
        query_id=data.get("query_id"),
        exec_time=data.get("exec_time"),
        query_time=data.get("query_time"),
        documents=list(data.get("data") or []),
        pagination=Pagination(
            page_size=data.get("page_size", 0),
            page_number=data.get("page_number", 1),
            record_count=data.get("record_count", 0),
            record_count_relation=data.get("record_count_relation", "eq"),
            page_count=data.get("page_count", 0),
            next_page=data.get("next_page", False),
            prev_page=data.get("prev_page", False),
        ),
        facets=facets if facets.has_facet_response else None,
    )


def memory_snapshot() -> MemorySnapshot:
    """Peak resident set size of this process plus the live GC object count."""
    max_rss: int | None = None
    if sys.platform != "win32":
        import resource

        usage = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
        # Linux reports kilobytes, macOS bytes.
        max_rss = usage if sys.platform == "darwin" else usage * 1024
    return MemorySnapshot(max_rss_bytes=max_rss, gc_objects=len(gc.get_objects()))
