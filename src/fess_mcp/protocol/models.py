"""MCP models — JSON-RPC 2.0 messages and MCP catalog descriptors.

Implements the message format served for capability negotiation
(``initialize``), tool discovery and execution (``tools/*``), resources
(``resources/*``) and prompts (``prompts/*``).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_serializer

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message."""

    jsonrpc: str | None = None
    method: str | None = None
    id: Any = None
    params: dict[str, Any] = {}

    @field_validator("params", mode="before")
    @classmethod
    def _null_params(cls, value: Any) -> Any:
        return {} if value is None else value


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message.

    Serializes with exactly one of ``result`` / ``error``; ``id`` is always
    present, even when it is ``None``.
    """

    jsonrpc: str = "2.0"
    id: Any = None
    result: Any = None
    error: JsonRpcError | None = None

    @model_serializer(mode="wrap")
    def _one_of_result_or_error(self, handler: Any) -> dict[str, Any]:
        data: dict[str, Any] = handler(self)
        if self.error is not None:
            data.pop("result", None)
        else:
            data.pop("error", None)
        return data

    @classmethod
    def success(cls, request_id: Any, result: Any) -> JsonRpcResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: Any, code: int, message: str) -> JsonRpcResponse:
        return cls(id=request_id, error=JsonRpcError(code=code, message=message))


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class ToolDef(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = {"populate_by_name": True, "frozen": True}

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")


class ResourceDef(BaseModel):
    """A resource definition as returned by ``resources/list``."""

    model_config = {"populate_by_name": True, "frozen": True}

    uri: str
    name: str
    description: str = ""
    mime_type: str = Field(default="application/json", alias="mimeType")


class PromptArgument(BaseModel):
    model_config = {"frozen": True}

    name: str
    description: str = ""
    required: bool = False


class PromptDef(BaseModel):
    """A prompt template as returned by ``prompts/list``."""

    model_config = {"frozen": True}

    name: str
    description: str = ""
    arguments: tuple[PromptArgument, ...] = ()


class TextContent(BaseModel):
    """A ``text`` content block — the unit of every tool and prompt payload."""

    type: Literal["text"] = "text"
    text: str


class PromptMessage(BaseModel):
    role: Literal["user", "assistant"] = "user"
    content: TextContent
