"""SearchBackend protocol — the collaborator that actually runs searches.

The dispatcher only talks to this interface; :class:`~fess_mcp.search.fess_client.FessClient`
is the bundled implementation, tests substitute their own.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from fess_mcp.search.params import SearchInvocationParams


class Pagination(BaseModel):
    page_size: int = 0
    page_number: int = 1
    record_count: int = 0
    record_count_relation: str = "eq"
    page_count: int = 0
    next_page: bool = False
    prev_page: bool = False


class FacetField(BaseModel):
    name: str
    value_count_map: dict[str, int] = Field(default_factory=dict)


class FacetResponse(BaseModel):
    """Field and query facet counts attached to a search result."""

    fields: list[FacetField] = Field(default_factory=list)
    query_count_map: dict[str, int] = Field(default_factory=dict)

    @property
    def has_facet_response(self) -> bool:
        return bool(self.fields or self.query_count_map)


class SearchResult(BaseModel):
    """Raw output of a search, before MCP formatting.

    ``documents`` are backend-shaped mappings; values may be arbitrary
    objects and are sanitized by the formatter.
    """

    model_config = {"arbitrary_types_allowed": True}

    query: str | None = None
    query_id: str | None = None
    exec_time: float | None = None
    query_time: int | None = None
    documents: list[dict[str, Any]] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)
    facets: FacetResponse | None = None


class MemorySnapshot(BaseModel):
    model_config = {"populate_by_name": True}

    max_rss_bytes: int | None = Field(default=None, alias="maxRssBytes")
    gc_objects: int = Field(default=0, alias="gcObjects")


class IndexStats(BaseModel):
    """Index statistics served by ``get_index_stats`` and ``fess://index/stats``."""

    model_config = {"populate_by_name": True}

    document_count: int = Field(alias="documentCount")
    max_page_size: int = Field(alias="maxPageSize")
    default_page_size: int = Field(alias="defaultPageSize")
    server_name: str = Field(alias="serverName")
    server_version: str = Field(alias="serverVersion")
    memory_snapshot: MemorySnapshot = Field(default_factory=MemorySnapshot, alias="memorySnapshot")


@runtime_checkable
class SearchBackend(Protocol):
    """Executes searches and reports index statistics."""

    async def search(self, params: SearchInvocationParams) -> SearchResult:
        """Run *params* against the index."""
        ...

    async def get_index_stats(self) -> IndexStats:
        """Return document count, paging bounds, server identity and memory usage."""
        ...
