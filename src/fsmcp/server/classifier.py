"""Message classification for one stdin line.

A line is either dropped (not JSON, or not a recognizable envelope), a
notification (no ``id``), a request (has ``id``), or an invalid request
(has ``id`` but the wrong shape). Requests for the generic ``tools/call``
method are unwrapped into the named tool's own request before dispatch.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from fsmcp.protocol.errors import (
    InvalidParamsError,
    InvalidRequestError,
    summarize_validation_error,
)
from fsmcp.protocol.models import (
    TOOLS_CALL_METHOD,
    JsonRpcNotification,
    JsonRpcRequest,
    RequestId,
    ToolCallParams,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvalidRequest:
    """A request-shaped message that cannot be dispatched.

    The loop answers it with a generic error response correlated by ``id``.
    """

    id: RequestId
    error: Exception


Message = JsonRpcRequest | JsonRpcNotification | InvalidRequest


def classify(line: str) -> Message | None:
    """Parse and classify one raw line; ``None`` means drop it silently."""
    try:
        value: Any = json.loads(line)
    except ValueError:
        logger.debug("Dropping unparsable line")
        return None

    if not isinstance(value, dict):
        logger.debug("Dropping non-object JSON value")
        return None

    if "id" not in value:
        if not isinstance(value.get("method"), str):
            logger.debug("Dropping object with neither id nor method")
            return None
        try:
            return JsonRpcNotification.model_validate(value)
        except ValidationError:
            logger.debug("Dropping malformed notification %s", value.get("method"))
            return None

    try:
        request = JsonRpcRequest.model_validate(value)
    except ValidationError as exc:
        return InvalidRequest(
            id=_salvage_id(value.get("id")),
            error=InvalidRequestError(summarize_validation_error(exc)),
        )

    if request.method == TOOLS_CALL_METHOD:
        try:
            return rewrite_tool_call(request)
        except InvalidParamsError as exc:
            return InvalidRequest(id=request.id, error=exc)
    return request


def rewrite_tool_call(request: JsonRpcRequest) -> JsonRpcRequest:
    """Turn ``tools/call {name, arguments}`` into a request for ``name``.

    The request ``id`` is preserved. Raises :class:`InvalidParamsError` when
    the params do not decode as ``{name, arguments}``.
    """
    if request.params is None:
        msg = f"{TOOLS_CALL_METHOD} requires params"
        raise InvalidParamsError(msg)
    try:
        params = ToolCallParams.model_validate(request.params)
    except ValidationError as exc:
        raise InvalidParamsError.from_validation(exc) from exc
    return JsonRpcRequest(id=request.id, method=params.name, params=params.arguments)


def _salvage_id(raw: Any) -> RequestId:
    """Keep the caller's id when it is a legal JSON-RPC id, else use null."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, str)):
        return raw
    return None

