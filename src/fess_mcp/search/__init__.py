"""Search layer — backend protocol, argument mapping and result formatting."""

from fess_mcp.search.backend import (
    FacetField,
    FacetResponse,
    IndexStats,
    MemorySnapshot,
    Pagination,
    SearchBackend,
    SearchResult,
)
from fess_mcp.search.params import SearchInvocationParams, build_search_params

__all__ = [
    "FacetField",
    "FacetResponse",
    "IndexStats",
    "MemorySnapshot",
    "Pagination",
    "SearchBackend",
    "SearchInvocationParams",
    "SearchResult",
    "build_search_params",
]
