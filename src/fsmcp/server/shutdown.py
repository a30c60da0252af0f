"""ShutdownCoordinator — races the message loop against termination signals.

Whichever finishes first wins: input EOF ends the loop normally, while
SIGINT/SIGTERM (Ctrl-C on Windows) ends the process without waiting for the
line in flight. In both cases cleanup callbacks run before termination.
"""

from __future__ import annotations

import asyncio
import logging
import signal
import sys
from collections.abc import Awaitable, Callable
from enum import Enum

logger = logging.getLogger(__name__)


class ShutdownState(str, Enum):
    RUNNING = "running"
    SHUTTING_DOWN = "shutting_down"
    TERMINATED = "terminated"


class ShutdownReason(str, Enum):
    EOF = "eof"
    SIGNAL = "signal"


def _default_signals() -> tuple[signal.Signals, ...]:
    if sys.platform == "win32":
        return (signal.SIGINT,)
    return (signal.SIGINT, signal.SIGTERM)


class ShutdownCoordinator:
    """Owns the RUNNING → SHUTTING_DOWN → TERMINATED lifecycle.

    Usage::

        coordinator = ShutdownCoordinator(cleanup=[transcript.close])
        reason = await coordinator.run(message_loop.run(read_lines()))
    """

    def __init__(
        self,
        cleanup: list[Callable[[], None]] | None = None,
        *,
        signals: tuple[signal.Signals, ...] | None = None,
    ) -> None:
        self._cleanup = list(cleanup or [])
        self._signals = signals if signals is not None else _default_signals()
        self._state = ShutdownState.RUNNING
        self._signal_event: asyncio.Event | None = None
        self._received: str | None = None
        self._installed: list[signal.Signals] = []

    @property
    def state(self) -> ShutdownState:
        return self._state

    @property
    def received_signal(self) -> str | None:
        return self._received

    def add_cleanup(self, callback: Callable[[], None]) -> None:
        self._cleanup.append(callback)

    def request_shutdown(self, name: str = "manual") -> None:
        """Record a termination request; safe to call from signal handlers."""
        if self._received is None:
            self._received = name
        if self._signal_event is not None:
            self._signal_event.set()

    async def wait_for_signal(self) -> str:
        """Block until :meth:`request_shutdown` is called."""
        event = self._ensure_event()
        await event.wait()
        return self._received or "manual"

    async def run(self, main: Awaitable[None]) -> ShutdownReason:
        """Run *main* until it finishes or a termination signal arrives."""
        self._ensure_event()
        loop = asyncio.get_running_loop()
        self._install_signal_handlers(loop)

        main_task = asyncio.ensure_future(main)
        signal_task = asyncio.ensure_future(self.wait_for_signal())
        try:
            done, pending = await asyncio.wait(
                {main_task, signal_task}, return_when=asyncio.FIRST_COMPLETED
            )
            for task in pending:
                task.cancel()

            if main_task in done:
                reason = ShutdownReason.EOF
                main_task.result()
            else:
                reason = ShutdownReason.SIGNAL
                logger.info("Received %s, shutting down", self._received)
        finally:
            self._remove_signal_handlers(loop)
            self.shutdown()
        return reason

    def shutdown(self) -> None:
        """Run cleanup callbacks once; failures are logged, not raised."""
        if self._state is not ShutdownState.RUNNING:
            return
        self._state = ShutdownState.SHUTTING_DOWN
        for callback in self._cleanup:
            try:
                callback()
            except Exception:
                logger.exception("Cleanup callback %r failed", callback)
        self._state = ShutdownState.TERMINATED

    def _ensure_event(self) -> asyncio.Event:
        if self._signal_event is None:
            self._signal_event = asyncio.Event()
            if self._received is not None:
                self._signal_event.set()
        return self._signal_event

    def _install_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        for sig in self._signals:
            if sys.platform == "win32":
                signal.signal(
                    sig,
                    lambda signum, _frame: loop.call_soon_threadsafe(
                        self.request_shutdown, signal.Signals(signum).name
                    ),
                )
            else:
                loop.add_signal_handler(sig, self.request_shutdown, sig.name)
            self._installed.append(sig)

    def _remove_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        for sig in self._installed:
            if sys.platform == "win32":
                signal.signal(sig, signal.SIG_DFL)
            else:
                loop.remove_signal_handler(sig)
        self._installed.clear()
