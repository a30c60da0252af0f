"""MessageLoop — reads lines, classifies, dispatches and answers them in order.

One line is fully processed (recorded, classified, dispatched, answered)
before the next one is taken, so responses leave in the order requests
arrived and the transcript interleaves input and output exactly.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, Callable
from typing import TYPE_CHECKING

from fsmcp.protocol.errors import generic_error
from fsmcp.protocol.models import (
    JsonRpcErrorResponse,
    JsonRpcNotification,
    JsonRpcResponse,
    RequestId,
)
from fsmcp.server.classifier import InvalidRequest, classify
from fsmcp.server.dispatcher import Emit, Fail, Outcome, Suppress
from fsmcp.server.notifications import NotificationRouter

if TYPE_CHECKING:
    from fsmcp.server.dispatcher import Dispatcher
    from fsmcp.server.transcript import TranscriptLog

logger = logging.getLogger(__name__)


def encode_outcome(request_id: RequestId, outcome: Outcome) -> str | None:
    """Serialize *outcome* as a compact JSON-RPC response line, or ``None``."""
    if isinstance(outcome, Suppress):
        return None
    if isinstance(outcome, Emit):
        return JsonRpcResponse(id=request_id, result=outcome.value).model_dump_json()
    if isinstance(outcome, Fail):
        return JsonRpcErrorResponse(id=request_id, error=outcome.error).model_dump_json()
    msg = f"Unknown dispatch outcome: {outcome!r}"
    raise TypeError(msg)


class MessageLoop:
    """Sequential stdin → dispatcher → stdout loop.

    Usage::

        loop = MessageLoop(dispatcher, transcript, write=LineWriter())
        await loop.run(read_lines())
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        transcript: TranscriptLog,
        *,
        write: Callable[[str], None],
        notifications: NotificationRouter | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._transcript = transcript
        self._write = write
        self._notifications = notifications or NotificationRouter()

    @property
    def notifications(self) -> NotificationRouter:
        return self._notifications

    async def run(self, lines: AsyncIterable[str]) -> None:
        """Process lines until the source is exhausted."""
        async for line in lines:
            await self.handle_line(line)
        logger.info("Input closed")

    async def handle_line(self, line: str) -> str | None:
        """Process one raw line; return the response line written, if any."""
        self._transcript.record(line)
        if not line.strip():
            return None

        message = classify(line)
        if message is None:
            return None

        if isinstance(message, JsonRpcNotification):
            self._notifications.handle(message)
            return None

        if isinstance(message, InvalidRequest):
            logger.warning("Rejecting request %r: %s", message.id, message.error)
            return self._emit(encode_outcome(message.id, Fail(generic_error(message.error))))

        outcome = await self._dispatcher.dispatch(message)
        return self._emit(encode_outcome(message.id, outcome))

    def _emit(self, response: str | None) -> str | None:
        if response is None:
            return None
        self._transcript.record(response)
        self._write(response)
        return response
