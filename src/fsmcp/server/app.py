"""Server assembly — wires registry, dispatcher, loop and shutdown together."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, Callable
from typing import TYPE_CHECKING

from fsmcp.capabilities import build_registry
from fsmcp.server.dispatcher import Dispatcher
from fsmcp.server.loop import MessageLoop
from fsmcp.server.shutdown import ShutdownCoordinator, ShutdownReason
from fsmcp.server.stdio import LineWriter, read_lines

if TYPE_CHECKING:
    import signal

    from fsmcp.server.config import ServerConfig
    from fsmcp.server.transcript import TranscriptLog

logger = logging.getLogger(__name__)


async def serve_stdio(
    config: ServerConfig,
    transcript: TranscriptLog,
    *,
    lines: AsyncIterable[str] | None = None,
    write: Callable[[str], None] | None = None,
    signals: tuple[signal.Signals, ...] | None = None,
) -> ShutdownReason:
    """Serve JSON-RPC over stdio until EOF or a termination signal.

    *transcript* must already be open; it is closed during shutdown.
    """
    registry = build_registry(config)
    dispatcher = Dispatcher(registry, timeout=config.dispatch_timeout)
    message_loop = MessageLoop(
        dispatcher,
        transcript,
        write=write if write is not None else LineWriter(),
    )
    coordinator = ShutdownCoordinator(cleanup=[transcript.close], signals=signals)

    logger.info(
        "Serving %d methods; transcript at %s", len(registry), transcript.path
    )
    reason = await coordinator.run(
        message_loop.run(lines if lines is not None else read_lines())
    )
    logger.info("Server stopped (%s)", reason.value)
    return reason
