"""Tests for notification routing."""

import logging

import pytest

from fsmcp.protocol.models import JsonRpcNotification
from fsmcp.server.notifications import NotificationRouter


class TestNotificationRouter:
    def test_initialized_marks_session(self) -> None:
        router = NotificationRouter()
        router.handle(JsonRpcNotification(method="notifications/initialized"))
        assert router.session.initialized

    def test_cancelled_counted(self) -> None:
        router = NotificationRouter()
        router.handle(
            JsonRpcNotification(
                method="notifications/cancelled",
                params={"requestId": 4, "reason": "timeout"},
            )
        )
        assert router.session.cancellations == 1

    def test_malformed_cancellation_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        router = NotificationRouter()
        with caplog.at_level(logging.WARNING, logger="fsmcp.server.notifications"):
            router.handle(JsonRpcNotification(method="notifications/cancelled", params={"x": 1}))
            router.handle(JsonRpcNotification(method="notifications/cancelled"))
        assert router.session.cancellations == 0
        assert "malformed cancellation" in caplog.text

    def test_unknown_notification_ignored(self) -> None:
        router = NotificationRouter()
        router.handle(JsonRpcNotification(method="notifications/progress", params={}))
        assert not router.session.initialized
        assert router.session.cancellations == 0
