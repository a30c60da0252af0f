"""MCP models — JSON-RPC 2.0 envelopes read from and written to stdio.

Requests and notifications are distinguished solely by the presence of an
``id`` key; ``tools/call`` parameters and cancellation notifications have
their own payload models.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

JSONRPC_VERSION = "2.0"

RequestId = StrictInt | StrictStr | None

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message (has an ``id``)."""

    jsonrpc: Literal["2.0"] = JSONRPC_VERSION
    id: RequestId
    method: str
    params: Any = None


class JsonRpcNotification(BaseModel):
    """A JSON-RPC 2.0 notification (no ``id``, never answered)."""

    jsonrpc: str = JSONRPC_VERSION
    method: str
    params: Any = None


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None

    def to_payload(self) -> dict[str, Any]:
        """Return the wire form, omitting ``data`` when unset."""
        return self.model_dump(exclude_none=True)


class JsonRpcResponse(BaseModel):
    """A successful JSON-RPC 2.0 response."""

    jsonrpc: str = JSONRPC_VERSION
    id: RequestId
    result: Any


class JsonRpcErrorResponse(BaseModel):
    """A failed JSON-RPC 2.0 response.

    ``error`` is kept opaque: handler errors are forwarded verbatim, so it is
    not forced through :class:`JsonRpcError`.
    """

    jsonrpc: str = JSONRPC_VERSION
    id: RequestId
    error: Any


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------

TOOLS_CALL_METHOD = "tools/call"


class ToolCallParams(BaseModel):
    """Parameters of a generic ``tools/call`` request."""

    name: str
    arguments: Any = None


class CancelledNotification(BaseModel):
    """Parameters of ``notifications/cancelled``."""

    model_config = ConfigDict(populate_by_name=True)

    request_id: int | str = Field(alias="requestId")
    reason: str | None = None


class ToolDefinition(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")


class PromptArgument(BaseModel):
    name: str
    description: str = ""
    required: bool = False


class PromptDefinition(BaseModel):
    """A prompt template as returned by ``prompts/list``."""

    name: str
    description: str = ""
    arguments: list[PromptArgument] = Field(default_factory=lambda: list[PromptArgument]())


class ResourceDefinition(BaseModel):
    """A readable resource as returned by ``resources/list``."""

    model_config = ConfigDict(populate_by_name=True)

    uri: str
    name: str
    mime_type: str | None = Field(default=None, alias="mimeType")
