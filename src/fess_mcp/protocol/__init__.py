"""Protocol layer — JSON-RPC envelope, MCP catalogs and the dispatcher."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fess_mcp.protocol.models import (
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    PromptArgument,
    PromptDef,
    PromptMessage,
    ResourceDef,
    TextContent,
    ToolDef,
)

if TYPE_CHECKING:
    from fess_mcp.protocol.dispatcher import McpDispatcher as McpDispatcher

__all__ = [
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "McpDispatcher",
    "PromptArgument",
    "PromptDef",
    "PromptMessage",
    "ResourceDef",
    "TextContent",
    "ToolDef",
]


def __getattr__(name: str) -> object:
    # The dispatcher imports the search layer, which imports these models.
    if name == "McpDispatcher":
        from fess_mcp.protocol.dispatcher import McpDispatcher

        return McpDispatcher
    raise AttributeError(f"module 'fess_mcp.protocol' has no attribute {name!r}")
