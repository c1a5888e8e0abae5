"""Static MCP catalogs — tools, resources and prompts.

Built once at import time and never mutated.
"""

from __future__ import annotations

from typing import Any

from fess_mcp.protocol.models import PromptArgument, PromptDef, ResourceDef, ToolDef

PROTOCOL_VERSION = "2024-11-05"

SEARCH_TOOL = "search"
INDEX_STATS_TOOL = "get_index_stats"

INDEX_STATS_URI = "fess://index/stats"

BASIC_SEARCH_PROMPT = "basic_search"
ADVANCED_SEARCH_PROMPT = "advanced_search"

_SEARCH_DESCRIPTION = (
    "Search documents indexed by Fess. "
    "The query uses Lucene-style syntax: combine terms with AND / OR, "
    'wrap an exact phrase in double quotes ("exact phrase"), '
    "prefix a term with - for exclusion (e.g. -draft), "
    "and restrict to a field with field:value (e.g. title:report)."
)

_SEARCH_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "q": {"type": "string", "description": "Query string"},
        "start": {"type": "integer", "description": "Start position (0-based)"},
        "offset": {"type": "integer", "description": "Offset from the start position"},
        "num": {"type": "integer", "description": "Number of results to return"},
        "sort": {"type": "string", "description": "Sort order (e.g. score.desc)"},
        "lang": {
            "type": ["string", "array"],
            "items": {"type": "string"},
            "description": "Language code(s) to filter by",
        },
        "fields": {
            "type": "object",
            "additionalProperties": {"type": "array", "items": {"type": "string"}},
            "description": "Field filters, e.g. {\"label\": [\"docs\"]}",
        },
        "as": {
            "type": "object",
            "additionalProperties": {"type": "array", "items": {"type": "string"}},
            "description": "Advanced search conditions, e.g. {\"filetype\": [\"pdf\"]}",
        },
        "ex_q": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Extra queries combined with the main query",
        },
        "sdh": {"type": "string", "description": "Similar document hash"},
    },
    "required": ["q"],
}

TOOLS: tuple[ToolDef, ...] = (
    ToolDef(name=SEARCH_TOOL, description=_SEARCH_DESCRIPTION, input_schema=_SEARCH_SCHEMA),
    ToolDef(
        name=INDEX_STATS_TOOL,
        description="Get index statistics and information",
        input_schema={"type": "object", "properties": {}, "required": []},
    ),
)

RESOURCES: tuple[ResourceDef, ...] = (
    ResourceDef(
        uri=INDEX_STATS_URI,
        name="Index Statistics",
        description="Fess index statistics and configuration information",
        mime_type="application/json",
    ),
)

PROMPTS: tuple[PromptDef, ...] = (
    PromptDef(
        name=BASIC_SEARCH_PROMPT,
        description="Perform a basic search with a query string",
        arguments=(PromptArgument(name="query", description="The search query", required=True),),
    ),
    PromptDef(
        name=ADVANCED_SEARCH_PROMPT,
        description="Perform an advanced search with sorting and result count",
        arguments=(
            PromptArgument(name="query", description="The search query", required=True),
            PromptArgument(name="sort", description="Sort order (e.g. score.desc)", required=False),
            PromptArgument(name="num", description="Number of results to return", required=False),
        ),
    ),
)


def list_tools() -> dict[str, Any]:
    """Return the ``tools/list`` payload."""
    return {"tools": [t.model_dump(by_alias=True) for t in TOOLS]}


def list_resources() -> dict[str, Any]:
    """Return the ``resources/list`` payload."""
    return {"resources": [r.model_dump(by_alias=True) for r in RESOURCES]}


def list_prompts() -> dict[str, Any]:
    """Return the ``prompts/list`` payload."""
    return {"prompts": [p.model_dump(mode="json") for p in PROMPTS]}


def find_resource(uri: str) -> ResourceDef | None:
    """Exact, case-sensitive lookup by URI."""
    for resource in RESOURCES:
        if resource.uri == uri:
            return resource
    return None
