"""MCP protocol — JSON-RPC envelopes, MCP payloads and error types."""

from fsmcp.protocol.errors import (
    DispatchTimeoutError,
    HandlerError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ProtocolError,
    TranscriptError,
)
from fsmcp.protocol.models import (
    CancelledNotification,
    JsonRpcError,
    JsonRpcErrorResponse,
    JsonRpcNotification,
    JsonRpcRequest,
    JsonRpcResponse,
    PromptArgument,
    PromptDefinition,
    ResourceDefinition,
    ToolCallParams,
    ToolDefinition,
)

__all__ = [
    "CancelledNotification",
    "DispatchTimeoutError",
    "HandlerError",
    "InvalidParamsError",
    "InvalidRequestError",
    "JsonRpcError",
    "JsonRpcErrorResponse",
    "JsonRpcNotification",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MethodNotFoundError",
    "PromptArgument",
    "PromptDefinition",
    "ProtocolError",
    "ResourceDefinition",
    "ToolCallParams",
    "ToolDefinition",
    "TranscriptError",
]
