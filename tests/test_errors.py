"""Tests for the error taxonomy."""

import pytest

from fess_mcp.errors import BackendError, ErrorCode, McpApiError, SettingsError


class TestErrorCode:
    @pytest.mark.parametrize(
        ("code", "value"),
        [
            (ErrorCode.PARSE_ERROR, -32700),
            (ErrorCode.INVALID_REQUEST, -32600),
            (ErrorCode.METHOD_NOT_FOUND, -32601),
            (ErrorCode.INVALID_PARAMS, -32602),
            (ErrorCode.INTERNAL_ERROR, -32603),
        ],
    )
    def test_values(self, code: ErrorCode, value: int) -> None:
        assert code == value
        assert int(code) == value

    def test_exactly_five_codes(self) -> None:
        assert len(ErrorCode) == 5


class TestMcpApiError:
    def test_attributes(self) -> None:
        err = McpApiError(ErrorCode.INVALID_PARAMS, "Missing required parameter: name")
        assert err.code is ErrorCode.INVALID_PARAMS
        assert err.message == "Missing required parameter: name"
        assert str(err) == "Missing required parameter: name"

    def test_is_exception(self) -> None:
        with pytest.raises(McpApiError):
            raise McpApiError(ErrorCode.METHOD_NOT_FOUND, "Unknown method: x")


class TestBackendError:
    def test_message_with_detail(self) -> None:
        err = BackendError("connection refused")
        assert str(err) == "Backend error: connection refused"
        assert err.detail == "connection refused"

    def test_message_without_detail(self) -> None:
        assert str(BackendError()) == "Backend error"


def test_settings_error_is_exception() -> None:
    assert issubclass(SettingsError, Exception)
