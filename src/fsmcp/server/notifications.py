"""Handlers for the small fixed set of notifications the server understands."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from pydantic import ValidationError

from fsmcp.protocol.models import CancelledNotification, JsonRpcNotification

logger = logging.getLogger(__name__)

INITIALIZED = "notifications/initialized"
CANCELLED = "notifications/cancelled"


@dataclass
class SessionState:
    """Per-process session flags updated by notifications."""

    initialized: bool = False
    cancellations: int = 0


class NotificationRouter:
    """Routes notifications by exact method name; unknown ones are ignored.

    Cancellation is advisory: it is recorded and logged but never interrupts
    a handler that is already running.
    """

    def __init__(self, session: SessionState | None = None) -> None:
        self.session = session or SessionState()
        self._handlers: dict[str, Callable[[JsonRpcNotification], None]] = {
            INITIALIZED: self._on_initialized,
            CANCELLED: self._on_cancelled,
        }

    def handle(self, notification: JsonRpcNotification) -> None:
        handler = self._handlers.get(notification.method)
        if handler is None:
            logger.debug("Ignoring notification %s", notification.method)
            return
        handler(notification)

    def _on_initialized(self, _: JsonRpcNotification) -> None:
        self.session.initialized = True
        logger.info("Client session initialized")

    def _on_cancelled(self, notification: JsonRpcNotification) -> None:
        try:
            params = CancelledNotification.model_validate(notification.params)
        except ValidationError as exc:
            logger.warning("Skipping malformed cancellation notification: %s", exc)
            return
        self.session.cancellations += 1
        logger.info(
            "Client cancelled request %s%s",
            params.request_id,
            f" ({params.reason})" if params.reason else "",
        )
