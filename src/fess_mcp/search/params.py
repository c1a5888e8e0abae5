"""Search argument normalization.

Turns the loosely-typed ``arguments`` of a ``search`` tool call into a
frozen :class:`SearchInvocationParams`. Malformed optional numbers never
fail the request; they fall back to configured defaults.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from fess_mcp.config import McpSettings

logger = logging.getLogger(__name__)

FIELDS_KEY = "fields"
CONDITIONS_KEY = "as"
EXTRA_QUERIES_KEY = "ex_q"


class SearchInvocationParams(BaseModel):
    """A fully normalized search request."""

    model_config = {"frozen": True}

    query: str | None = None
    start: int = 0
    page_size: int = 1
    offset: int = 0
    sort: str | None = None
    fields: dict[str, list[str]] = Field(default_factory=dict)
    conditions: dict[str, list[str]] = Field(default_factory=dict)
    languages: list[str] = Field(default_factory=list)
    extra_queries: list[str] | None = None
    similar_doc_hash: str | None = None


def build_search_params(arguments: Mapping[str, Any], settings: McpSettings) -> SearchInvocationParams:
    """Normalize raw tool *arguments* using the paging bounds in *settings*."""
    return SearchInvocationParams(
        query=_optional_str(arguments.get("q")),
        start=_start_position(arguments.get("start"), settings),
        page_size=_page_size(arguments.get("num"), settings),
        offset=_offset(arguments.get("offset")),
        sort=_optional_str(arguments.get("sort")),
        fields=_multi_map(arguments, FIELDS_KEY),
        conditions=_multi_map(arguments, CONDITIONS_KEY),
        languages=_string_list(arguments.get("lang")) or [],
        extra_queries=_string_list(arguments.get(EXTRA_QUERIES_KEY)),
        similar_doc_hash=_optional_str(arguments.get("sdh")),
    )


def parse_int(value: Any) -> int | None:
    """Parse *value* as an integer, returning ``None`` when it is absent or malformed."""
    if value is None:
        return None
    if isinstance(value, bool):
        logger.debug("Failed to parse %r as an integer", value)
        return None
    try:
        if isinstance(value, (int, float)):
            return int(value)
        return int(str(value))
    except (ValueError, OverflowError):
        logger.debug("Failed to parse %r as an integer", value)
        return None


def _start_position(value: Any, settings: McpSettings) -> int:
    start = parse_int(value)
    if start is not None and start > -1:
        return start
    return settings.default_start


def _page_size(value: Any, settings: McpSettings) -> int:
    # Anything out of range, including absence, resolves to the maximum.
    num = parse_int(value)
    if num is None or num <= 0 or num > settings.max_page_size:
        return settings.max_page_size
    return num


def _offset(value: Any) -> int:
    offset = parse_int(value)
    return 0 if offset is None else offset


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _string_list(value: Any) -> list[str] | None:
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]


def _multi_map(arguments: Mapping[str, Any], key: str) -> dict[str, list[str]]:
    """Collect ``key`` as a nested mapping plus flat ``key.<name>`` aliases."""
    result: dict[str, list[str]] = {}
    nested = arguments.get(key)
    if isinstance(nested, Mapping):
        for name, values in nested.items():
            result[str(name)] = _string_list(values) or []

    prefix = key + "."
    for name, values in arguments.items():
        if isinstance(name, str) and name.startswith(prefix) and len(name) > len(prefix):
            result.setdefault(name[len(prefix):], []).extend(_string_list(values) or [])
    return result
