"""Shared fixtures: settings, a mocked search backend and a dispatcher over it."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from fess_mcp.config import McpSettings
from fess_mcp.protocol.dispatcher import McpDispatcher
from fess_mcp.search.backend import IndexStats, MemorySnapshot, Pagination, SearchResult


def make_search_result(documents: list[dict[str, Any]] | None = None, **kwargs: Any) -> SearchResult:
    docs = documents if documents is not None else [
        {
            "title": "Quarterly report",
            "url": "https://example.com/report",
            "content": "Revenue grew in Q3.",
            "score": 1.5,
        },
        {
            "title": "Annual report",
            "url": "https://example.com/annual",
            "content": "Full year summary.",
        },
    ]
    return SearchResult(
        query=kwargs.pop("query", "report"),
        query_id="qid-1",
        exec_time=0.05,
        query_time=12,
        documents=docs,
        pagination=Pagination(page_size=20, page_number=1, record_count=len(docs), page_count=1),
        **kwargs,
    )


@pytest.fixture
def settings() -> McpSettings:
    return McpSettings(default_start=0, default_page_size=20, max_page_size=100, content_max_length=10000)


@pytest.fixture
def index_stats() -> IndexStats:
    return IndexStats(
        document_count=42,
        max_page_size=100,
        default_page_size=20,
        server_name="fess-mcp-server",
        server_version="1.0.0",
        memory_snapshot=MemorySnapshot(max_rss_bytes=1024, gc_objects=10),
    )


@pytest.fixture
def backend(index_stats: IndexStats) -> MagicMock:
    mock = MagicMock()
    mock.search = AsyncMock(return_value=make_search_result())
    mock.get_index_stats = AsyncMock(return_value=index_stats)
    return mock


@pytest.fixture
def dispatcher(backend: MagicMock, settings: McpSettings) -> McpDispatcher:
    return McpDispatcher(backend, settings)


@pytest.fixture
def search_result_factory() -> Any:
    return make_search_result
