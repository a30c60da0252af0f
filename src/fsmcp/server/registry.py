"""MethodRegistry — immutable mapping from JSON-RPC method name to handler.

Built once at startup with :class:`RegistryBuilder` and shared read-only by
the message loop for the lifetime of the process.
"""

from __future__ import annotations

from collections.abc import Awaitable, Iterator, Mapping
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable

from fsmcp.protocol.errors import MethodNotFoundError


@runtime_checkable
class Handler(Protocol):
    """A capability handler: accepts opaque params, returns an opaque result.

    A handler may be a coroutine function or a plain callable. Returning
    ``None`` means "nothing to send back"; raising
    :class:`~fsmcp.protocol.errors.HandlerError` reports a structured error.
    """

    def __call__(self, params: Any) -> Awaitable[Any] | Any: ...


class MethodRegistry(Mapping[str, Handler]):
    """Read-only name → handler table."""

    def __init__(self, handlers: Mapping[str, Handler]) -> None:
        self._handlers: Mapping[str, Handler] = MappingProxyType(dict(handlers))

    def __getitem__(self, method: str) -> Handler:
        return self._handlers[method]

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    def resolve(self, method: str) -> Handler:
        """Return the handler for *method* or raise :class:`MethodNotFoundError`."""
        handler = self._handlers.get(method)
        if handler is None:
            raise MethodNotFoundError(method)
        return handler


class RegistryBuilder:
    """Collects handlers before freezing them into a :class:`MethodRegistry`.

    Usage::

        registry = (
            RegistryBuilder()
            .append("ping", ping)
            .append("tools/list", tools_list)
            .build()
        )
    """

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}

    def append(self, method: str, handler: Handler) -> RegistryBuilder:
        if method in self._handlers:
            msg = f"Handler already registered for method: {method}"
            raise ValueError(msg)
        self._handlers[method] = handler
        return self

    def build(self) -> MethodRegistry:
        return MethodRegistry(self._handlers)
