"""Search result formatting — backend output to MCP content blocks."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from functools import singledispatch
from typing import TYPE_CHECKING, Any

from fess_mcp.protocol.models import TextContent

if TYPE_CHECKING:
    from fess_mcp.search.backend import FacetResponse, SearchResult

ELLIPSIS = "..."


# ---------------------------------------------------------------------------
# Value sanitizer
# ---------------------------------------------------------------------------


@singledispatch
def sanitize(value: Any) -> Any:
    """Convert *value* into plain JSON-serializable data.

    Scalars pass through, sequences become lists, mappings become dicts with
    string keys, and anything else (highlight fragments, dates, custom
    objects) becomes its string form.
    """
    return str(value)


@sanitize.register(type(None))
def _sanitize_none(value: None) -> None:
    return None


@sanitize.register(str)
@sanitize.register(int)
@sanitize.register(float)
@sanitize.register(bool)
def _sanitize_scalar(value: str | int | float | bool) -> Any:
    return value


@sanitize.register(list)
@sanitize.register(tuple)
@sanitize.register(set)
@sanitize.register(frozenset)
def _sanitize_sequence(value: Iterable[Any]) -> list[Any]:
    return [sanitize(v) for v in value]


@sanitize.register(Mapping)
def _sanitize_mapping(value: Mapping[Any, Any]) -> dict[str, Any]:
    return {str(k): sanitize(v) for k, v in value.items()}


def process_document_items(documents: Iterable[Mapping[str, Any]] | None) -> list[dict[str, Any]]:
    """Sanitize every document of a search result; ``None`` yields an empty list."""
    if documents is None:
        return []
    return [_sanitize_mapping(doc) for doc in documents]


# ---------------------------------------------------------------------------
# Content rendering
# ---------------------------------------------------------------------------


def truncate_content(content: str | None, max_length: int) -> str | None:
    """Cut *content* to *max_length* characters and append ``...``.

    Content at or under the limit, including ``None`` and ``""``, is returned
    unchanged.
    """
    if content is None or len(content) <= max_length:
        return content
    return content[:max_length] + ELLIPSIS


def create_document_content(doc: Mapping[str, Any], max_length: int) -> TextContent:
    """Render one search hit as a Markdown-like text block."""
    lines = [
        f"**Title**: {_text(doc.get('title'))}",
        f"**URL**: {_text(doc.get('url'))}",
    ]
    score = doc.get("score")
    if score is not None:
        lines.append(f"**Score**: {score}")
    lines.append("")

    body = doc.get("content")
    if body is None:
        body = doc.get("content_description")
    lines.append(truncate_content(_text(body), max_length) or "")
    return TextContent(text="\n".join(lines))


def shape_facets(facets: FacetResponse | None) -> dict[str, Any]:
    """Convert facet counts into ``facet_field`` / ``facet_query`` lists.

    Returns an empty mapping when the backend reports no facet data.
    """
    if facets is None or not facets.has_facet_response:
        return {}
    return {
        "facet_field": [
            {
                "name": field.name,
                "result": [{"value": v, "count": c} for v, c in field.value_count_map.items()],
            }
            for field in facets.fields
        ],
        "facet_query": [{"value": v, "count": c} for v, c in facets.query_count_map.items()],
    }


def format_search_result(result: SearchResult, max_length: int) -> dict[str, Any]:
    """Build the ``tools/call`` payload for a ``search`` invocation.

    ``content`` holds exactly one text block per hit; ``structuredContent``
    carries the paging summary and facets.
    """
    documents = process_document_items(result.documents)
    page = result.pagination
    summary: dict[str, Any] = {
        "q": result.query,
        "query_id": result.query_id,
        "exec_time": result.exec_time,
        "query_time": result.query_time,
        "page_size": page.page_size,
        "page_number": page.page_number,
        "record_count": page.record_count,
        "record_count_relation": page.record_count_relation,
        "page_count": page.page_count,
        "next_page": page.next_page,
        "prev_page": page.prev_page,
    }
    summary.update(shape_facets(result.facets))

    return {
        "content": [create_document_content(doc, max_length).model_dump() for doc in documents],
        "structuredContent": sanitize(summary),
    }


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    sanitized = sanitize(value)
    if isinstance(sanitized, list):
        return " ".join(str(v) for v in sanitized)
    return str(sanitized)
