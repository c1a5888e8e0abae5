"""JSON-RPC 2.0 error taxonomy shared by every layer of the server."""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    """Standard JSON-RPC 2.0 error codes. No other codes are ever emitted."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


class McpApiError(Exception):
    """A request failure that maps onto exactly one :class:`ErrorCode`."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


class BackendError(Exception):
    """The search backend could not be reached or returned garbage."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Backend error" + (f": {detail}" if detail else ""))


class SettingsError(Exception):
    """Raised when a settings file fails parsing or validation."""
