"""McpDispatcher — JSON-RPC 2.0 entrypoint routing MCP methods to handlers.

Validates the envelope, routes ``initialize``, ``tools/*``, ``resources/*``
and ``prompts/*`` to their handlers, and always answers with a well-formed
JSON-RPC response, even when the request or the backend fails.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from fess_mcp.config import McpSettings
from fess_mcp.errors import ErrorCode, McpApiError
from fess_mcp.protocol import registry
from fess_mcp.protocol.models import JsonRpcRequest, JsonRpcResponse, PromptMessage, TextContent
from fess_mcp.search.formatter import format_search_result
from fess_mcp.search.params import build_search_params
from fess_mcp.utils.telemetry import (
    ATTR_ERROR_CODE,
    ATTR_RPC_METHOD,
    ATTR_TOOL_NAME,
    get_tracer,
    record_result_count,
)

if TYPE_CHECKING:
    from fess_mcp.search.backend import SearchBackend

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

JSONRPC_VERSION = "2.0"
INTERNAL_ERROR_FALLBACK = "Internal error"

Handler = Callable[[Mapping[str, Any]], Awaitable[Any]]


class McpDispatcher:
    """Handles one JSON-RPC request at a time; holds no per-call state.

    Usage::

        async with FessClient(settings) as backend:
            dispatcher = McpDispatcher(backend, settings)
            response_text = await dispatcher.handle(request_text)
    """

    def __init__(self, backend: SearchBackend, settings: McpSettings | None = None) -> None:
        self._backend = backend
        self._settings = settings or McpSettings()
        self._methods: dict[str, Handler] = {
            "initialize": self._handle_initialize,
            "tools/list": self._handle_list_tools,
            "tools/call": self._handle_call_tool,
            "resources/list": self._handle_list_resources,
            "resources/read": self._handle_read_resource,
            "prompts/list": self._handle_list_prompts,
            "prompts/get": self._handle_get_prompt,
        }
        self._tools: dict[str, Handler] = {
            registry.SEARCH_TOOL: self._invoke_search,
            registry.INDEX_STATS_TOOL: self._invoke_index_stats,
        }
        self._resources: dict[str, Callable[[], Awaitable[str]]] = {
            registry.INDEX_STATS_URI: self._index_stats_json,
        }

    @property
    def settings(self) -> McpSettings:
        return self._settings

    @property
    def methods(self) -> list[str]:
        """Names of every routable method."""
        return list(self._methods)

    async def handle(self, raw_body: str | bytes) -> str:
        """Parse *raw_body*, process it and return the serialized response."""
        try:
            payload = json.loads(raw_body)
        except (ValueError, RecursionError) as exc:
            # The id is unknown until the body parses.
            logger.debug("Failed to parse request body.", exc_info=True)
            return _serialize(JsonRpcResponse.failure(None, ErrorCode.INTERNAL_ERROR, _message(exc)))

        return _serialize(await self.handle_payload(payload))

    async def handle_payload(self, payload: Any) -> JsonRpcResponse:
        """Process an already-decoded request body."""
        request_id = payload.get("id") if isinstance(payload, dict) else None
        try:
            request = _validate_envelope(payload)
            logger.debug("request: method=%s id=%r params=%s", request.method, request_id, request.params)
            result = await self.dispatch(request.method, request.params)
            logger.debug("result: %s", result)
            return JsonRpcResponse.success(request_id, result)
        except McpApiError as exc:
            logger.debug("Failed to process request.", exc_info=True)
            return JsonRpcResponse.failure(request_id, exc.code, exc.message)
        except Exception as exc:
            logger.warning("Failed to process request: %s", exc, exc_info=True)
            return JsonRpcResponse.failure(request_id, ErrorCode.INTERNAL_ERROR, _message(exc))

    async def dispatch(self, method: str | None, params: Mapping[str, Any]) -> Any:
        """Route *method* to its handler and return the raw ``result`` payload.

        Raises:
            ValueError: If *method* is ``None``.
            McpApiError: For unknown methods and invalid parameters.
        """
        if method is None:
            msg = "method is required"
            raise ValueError(msg)

        with _tracer.start_as_current_span("mcp.dispatch") as span:
            span.set_attribute(ATTR_RPC_METHOD, method)
            handler = self._methods.get(method)
            try:
                if handler is None:
                    raise McpApiError(ErrorCode.METHOD_NOT_FOUND, f"Unknown method: {method}")
                return await handler(params)
            except McpApiError as exc:
                span.set_attribute(ATTR_ERROR_CODE, int(exc.code))
                raise

    # ------------------------------------------------------------------
    # initialize / list handlers
    # ------------------------------------------------------------------

    async def _handle_initialize(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return {
            "protocolVersion": registry.PROTOCOL_VERSION,
            "capabilities": {"tools": {}, "resources": {}, "prompts": {}},
            "serverInfo": {
                "name": self._settings.server_name,
                "version": self._settings.server_version,
            },
        }

    async def _handle_list_tools(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return registry.list_tools()

    async def _handle_list_resources(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return registry.list_resources()

    async def _handle_list_prompts(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return registry.list_prompts()

    # ------------------------------------------------------------------
    # tools/call
    # ------------------------------------------------------------------

    async def _handle_call_tool(self, params: Mapping[str, Any]) -> dict[str, Any]:
        name = params.get("name")
        if not name:
            raise McpApiError(ErrorCode.INVALID_PARAMS, "Missing required parameter: name")
        # An explicit null is accepted as empty arguments; only absence is rejected.
        if "arguments" not in params:
            raise McpApiError(ErrorCode.INVALID_PARAMS, "Missing required parameter: arguments")
        arguments = _as_mapping(params["arguments"], "arguments")

        invoke = self._tools.get(name) if isinstance(name, str) else None
        if invoke is None:
            raise McpApiError(ErrorCode.INVALID_PARAMS, f"Unknown tool: {name}")

        with _tracer.start_as_current_span("mcp.tool") as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            return await invoke(arguments)

    async def _invoke_search(self, arguments: Mapping[str, Any]) -> dict[str, Any]:
        search_params = build_search_params(arguments, self._settings)
        logger.debug("search params: %s", search_params)
        result = await self._backend.search(search_params)
        record_result_count(len(result.documents))
        return format_search_result(result, self._settings.content_max_length)

    async def _invoke_index_stats(self, arguments: Mapping[str, Any]) -> dict[str, Any]:
        text = await self._index_stats_json()
        return {"content": [TextContent(text=text).model_dump()]}

    async def _index_stats_json(self) -> str:
        stats = await self._backend.get_index_stats()
        return stats.model_dump_json(by_alias=True, indent=2)

    # ------------------------------------------------------------------
    # resources/read
    # ------------------------------------------------------------------

    async def _handle_read_resource(self, params: Mapping[str, Any]) -> dict[str, Any]:
        uri = params.get("uri")
        if uri is None or not str(uri).strip():
            raise McpApiError(ErrorCode.INVALID_PARAMS, "Missing required parameter: uri")

        resource = registry.find_resource(uri) if isinstance(uri, str) else None
        reader = self._resources.get(resource.uri) if resource is not None else None
        if resource is None or reader is None:
            raise McpApiError(ErrorCode.INVALID_PARAMS, f"Unknown resource: {uri}")

        return {
            "contents": [
                {"uri": resource.uri, "mimeType": resource.mime_type, "text": await reader()},
            ]
        }

    # ------------------------------------------------------------------
    # prompts/get
    # ------------------------------------------------------------------

    async def _handle_get_prompt(self, params: Mapping[str, Any]) -> dict[str, Any]:
        name = params.get("name")
        if not name:
            raise McpApiError(ErrorCode.INVALID_PARAMS, "Missing required parameter: name")
        arguments = _as_mapping(params.get("arguments"), "arguments")

        render = _PROMPT_RENDERERS.get(name) if isinstance(name, str) else None
        if render is None:
            raise McpApiError(ErrorCode.INVALID_PARAMS, f"Unknown prompt: {name}")

        message = PromptMessage(role="user", content=TextContent(text=render(arguments)))
        return {"messages": [message.model_dump()]}


# ---------------------------------------------------------------------------
# Prompt rendering
# ---------------------------------------------------------------------------


def render_basic_search(arguments: Mapping[str, Any]) -> str:
    return f"Please search for: {_required_query(arguments)}"


def render_advanced_search(arguments: Mapping[str, Any]) -> str:
    text = (
        "Please perform an advanced search with the following parameters:\n"
        f"Query: {_required_query(arguments)}"
    )
    sort = _optional_argument(arguments, "sort")
    if sort is not None:
        text += f"\nSort: {sort}"
    num = _optional_argument(arguments, "num")
    if num is not None:
        text += f"\nNumber of results: {num}"
    return text


_PROMPT_RENDERERS: dict[str, Callable[[Mapping[str, Any]], str]] = {
    registry.BASIC_SEARCH_PROMPT: render_basic_search,
    registry.ADVANCED_SEARCH_PROMPT: render_advanced_search,
}


def _required_query(arguments: Mapping[str, Any]) -> str:
    query = arguments.get("query")
    if query is None or str(query) == "":
        raise McpApiError(ErrorCode.INVALID_PARAMS, "Missing required argument: query")
    return str(query)


def _optional_argument(arguments: Mapping[str, Any], key: str) -> str | None:
    value = arguments.get(key)
    if value is None:
        return None
    text = str(value)
    return text or None


# ---------------------------------------------------------------------------
# Envelope helpers
# ---------------------------------------------------------------------------


def _validate_envelope(payload: Any) -> JsonRpcRequest:
    if not isinstance(payload, dict):
        raise McpApiError(ErrorCode.INVALID_REQUEST, "Invalid JSON-RPC request")
    try:
        request = JsonRpcRequest.model_validate(payload)
    except ValidationError as exc:
        raise McpApiError(ErrorCode.INVALID_REQUEST, "Invalid JSON-RPC request") from exc
    if request.jsonrpc != JSONRPC_VERSION or request.method is None:
        raise McpApiError(ErrorCode.INVALID_REQUEST, "Invalid JSON-RPC request")
    return request


def _as_mapping(value: Any, name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise McpApiError(ErrorCode.INVALID_PARAMS, f"Parameter '{name}' must be an object")
    return value


def _serialize(response: JsonRpcResponse) -> str:
    try:
        return response.model_dump_json()
    except Exception as exc:
        logger.warning("Failed to serialize response: %s", exc, exc_info=True)
        fallback = JsonRpcResponse.failure(response.id, ErrorCode.INTERNAL_ERROR, _message(exc))
        return fallback.model_dump_json()


def _message(exc: BaseException) -> str:
    return str(exc) or INTERNAL_ERROR_FALLBACK
