"""Dispatcher — routes an effective request to its handler.

The outcome of every dispatch is one of three explicit cases:

* :class:`Emit`: the handler produced a value to send back.
* :class:`Suppress`: the handler returned ``None``; nothing is sent.
* :class:`Fail`: the handler or the routing step failed; an error is sent.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from fsmcp.protocol.errors import DispatchTimeoutError, HandlerError, generic_error
from fsmcp.utils.telemetry import (
    ATTR_RPC_ERROR_CODE,
    ATTR_RPC_ID,
    ATTR_RPC_METHOD,
    ATTR_RPC_OUTCOME,
    get_tracer,
)

if TYPE_CHECKING:
    from fsmcp.protocol.models import JsonRpcRequest
    from fsmcp.server.registry import Handler, MethodRegistry

logger = logging.getLogger(__name__)

_tracer = get_tracer(__name__)


@dataclass(frozen=True)
class Emit:
    value: Any


@dataclass(frozen=True)
class Suppress:
    pass


@dataclass(frozen=True)
class Fail:
    error: Any


Outcome = Emit | Suppress | Fail


class Dispatcher:
    """Looks up handlers in a :class:`MethodRegistry` and invokes them.

    Usage::

        dispatcher = Dispatcher(registry, timeout=30.0)
        outcome = await dispatcher.dispatch(request)

    ``timeout`` bounds each handler call; ``None`` (the default) lets a
    handler run to completion.
    """

    def __init__(self, registry: MethodRegistry, *, timeout: float | None = None) -> None:
        self._registry = registry
        self._timeout = timeout

    @property
    def registry(self) -> MethodRegistry:
        return self._registry

    async def dispatch(self, request: JsonRpcRequest) -> Outcome:
        """Invoke the handler for ``request.method`` and classify the result."""
        with _tracer.start_as_current_span("rpc.dispatch") as span:
            span.set_attribute(ATTR_RPC_METHOD, request.method)
            span.set_attribute(ATTR_RPC_ID, str(request.id))

            outcome = await self._dispatch(request)

            span.set_attribute(ATTR_RPC_OUTCOME, type(outcome).__name__.lower())
            if isinstance(outcome, Fail) and isinstance(outcome.error, dict):
                code = outcome.error.get("code")
                if isinstance(code, int):
                    span.set_attribute(ATTR_RPC_ERROR_CODE, code)
            return outcome

    async def _dispatch(self, request: JsonRpcRequest) -> Outcome:
        try:
            handler = self._registry.resolve(request.method)
            result = await self._invoke(handler, request)
        except HandlerError as exc:
            logger.debug("Handler for %s reported an error: %s", request.method, exc)
            return Fail(exc.payload)
        except Exception as exc:
            logger.warning("Dispatch of %s failed: %s", request.method, exc)
            return Fail(generic_error(exc))

        if result is None:
            return Suppress()
        return Emit(result)

    async def _invoke(self, handler: Handler, request: JsonRpcRequest) -> Any:
        result = handler(request.params)
        if not inspect.isawaitable(result):
            return result
        if self._timeout is None:
            return await result
        try:
            return await asyncio.wait_for(result, self._timeout)
        except asyncio.TimeoutError as exc:
            raise DispatchTimeoutError(request.method, self._timeout) from exc
