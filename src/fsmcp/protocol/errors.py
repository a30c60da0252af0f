"""Shared error types for the protocol layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pydantic import ValidationError

GENERIC_ERROR_CODE = -1

# JSON-RPC / MCP codes used by capability handlers.
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
RESOURCE_NOT_FOUND = -32002


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""


class HandlerError(ProtocolError):
    """A handler reported a structured error payload.

    The payload is surfaced verbatim as the ``error`` member of the response.
    """

    def __init__(self, payload: dict[str, Any]) -> None:
        self.payload = payload
        super().__init__(str(payload.get("message", payload)))

    @classmethod
    def from_code(cls, code: int, message: str, data: Any = None) -> HandlerError:
        payload: dict[str, Any] = {"code": code, "message": message}
        if data is not None:
            payload["data"] = data
        return cls(payload)


class MethodNotFoundError(ProtocolError):
    """No handler is registered under the requested method name."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Method not found: {method}")


class InvalidParamsError(ProtocolError):
    """Request parameters could not be decoded into the expected shape."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Invalid params" + (f": {detail}" if detail else ""))

    @classmethod
    def from_validation(cls, exc: ValidationError) -> InvalidParamsError:
        return cls(summarize_validation_error(exc))


class InvalidRequestError(ProtocolError):
    """A message carried an ``id`` but is not a well-formed request."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Invalid request" + (f": {detail}" if detail else ""))


class DispatchTimeoutError(ProtocolError):
    """A handler did not complete within the configured dispatch timeout."""

    def __init__(self, method: str, timeout: float) -> None:
        self.method = method
        self.timeout = timeout
        super().__init__(f"Handler for {method} timed out after {timeout}s")


class TranscriptError(ProtocolError):
    """The line transcript could not be opened or written."""


def generic_error(exc: BaseException) -> dict[str, Any]:
    """Build the ``{code: -1, message}`` payload for routing and decode failures."""
    return {
        "code": GENERIC_ERROR_CODE,
        "message": f"Invalid json-rpc call, error: {exc}",
    }


def summarize_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic error into ``loc: msg; loc: msg``."""
    parts: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)
