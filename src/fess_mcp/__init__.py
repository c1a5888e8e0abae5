"""fess-mcp — Model Context Protocol server over the Fess search engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from fess_mcp.protocol.dispatcher import McpDispatcher as McpDispatcher
    from fess_mcp.search.fess_client import FessClient as FessClient

_LAZY_EXPORTS = {
    "McpDispatcher": "fess_mcp.protocol.dispatcher",
    "FessClient": "fess_mcp.search.fess_client",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'fess_mcp' has no attribute {name!r}")
