"""Tests for line classification and tools/call rewriting."""

import pytest

from fsmcp.protocol.errors import InvalidParamsError, InvalidRequestError
from fsmcp.protocol.models import JsonRpcNotification, JsonRpcRequest
from fsmcp.server.classifier import InvalidRequest, classify, rewrite_tool_call


class TestDroppedLines:
    @pytest.mark.parametrize(
        "line",
        ["not json", "{", "[1, 2]", "42", '"text"', "null", '{"jsonrpc": "2.0"}'],
    )
    def test_dropped(self, line: str) -> None:
        assert classify(line) is None

    def test_notification_with_non_string_method_dropped(self) -> None:
        assert classify('{"method": 5}') is None


class TestNotifications:
    def test_no_id_is_notification(self) -> None:
        message = classify('{"method":"notifications/initialized"}')
        assert isinstance(message, JsonRpcNotification)
        assert message.method == "notifications/initialized"

    def test_notification_params_kept(self) -> None:
        message = classify(
            '{"jsonrpc":"2.0","method":"notifications/cancelled","params":{"requestId":3}}'
        )
        assert isinstance(message, JsonRpcNotification)
        assert message.params == {"requestId": 3}


class TestRequests:
    def test_request(self) -> None:
        message = classify('{"jsonrpc":"2.0","id":1,"method":"ping","params":null}')
        assert isinstance(message, JsonRpcRequest)
        assert message.id == 1
        assert message.method == "ping"
        assert message.params is None

    def test_null_id_still_request(self) -> None:
        message = classify('{"jsonrpc":"2.0","id":null,"method":"ping"}')
        assert isinstance(message, JsonRpcRequest)
        assert message.id is None

    def test_missing_method_is_invalid_request(self) -> None:
        message = classify('{"jsonrpc":"2.0","id":9}')
        assert isinstance(message, InvalidRequest)
        assert message.id == 9
        assert isinstance(message.error, InvalidRequestError)

    def test_wrong_version_is_invalid_request(self) -> None:
        message = classify('{"jsonrpc":"1.0","id":"x","method":"ping"}')
        assert isinstance(message, InvalidRequest)
        assert message.id == "x"

    def test_unusable_id_replaced_by_null(self) -> None:
        message = classify('{"jsonrpc":"2.0","id":{"a":1},"method":"ping"}')
        assert isinstance(message, InvalidRequest)
        assert message.id is None

    @pytest.mark.parametrize("raw_id", ["true", "false", "1.0", "2.5"])
    def test_non_integer_id_is_not_coerced(self, raw_id: str) -> None:
        message = classify(f'{{"jsonrpc":"2.0","id":{raw_id},"method":"ping"}}')
        assert isinstance(message, InvalidRequest)
        assert message.id is None


class TestToolCallRewrite:
    def test_rewritten_before_dispatch(self) -> None:
        message = classify(
            '{"jsonrpc":"2.0","id":2,"method":"tools/call",'
            '"params":{"name":"list_dir","arguments":{"path":"/tmp"}}}'
        )
        assert isinstance(message, JsonRpcRequest)
        assert message.id == 2
        assert message.method == "list_dir"
        assert message.params == {"path": "/tmp"}

    def test_arguments_optional(self) -> None:
        request = JsonRpcRequest(id=5, method="tools/call", params={"name": "ping"})
        rewritten = rewrite_tool_call(request)
        assert rewritten.method == "ping"
        assert rewritten.params is None
        assert rewritten.id == 5

    def test_missing_params_is_invalid_request(self) -> None:
        message = classify('{"jsonrpc":"2.0","id":3,"method":"tools/call"}')
        assert isinstance(message, InvalidRequest)
        assert message.id == 3
        assert isinstance(message.error, InvalidParamsError)

    def test_missing_name_is_invalid_request(self) -> None:
        message = classify(
            '{"jsonrpc":"2.0","id":4,"method":"tools/call","params":{"arguments":{}}}'
        )
        assert isinstance(message, InvalidRequest)
        assert "name" in str(message.error)

    def test_non_object_params_is_invalid_request(self) -> None:
        message = classify('{"jsonrpc":"2.0","id":4,"method":"tools/call","params":[1]}')
        assert isinstance(message, InvalidRequest)

    def test_rewrite_raises_on_bad_params(self) -> None:
        request = JsonRpcRequest(id=1, method="tools/call", params={"name": 1})
        with pytest.raises(InvalidParamsError):
            rewrite_tool_call(request)
