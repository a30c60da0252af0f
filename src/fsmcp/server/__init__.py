"""Stdio JSON-RPC server core — classification, dispatch, transcript, shutdown."""

from fsmcp.server.classifier import InvalidRequest, classify, rewrite_tool_call
from fsmcp.server.config import ServerConfig
from fsmcp.server.dispatcher import Dispatcher, Emit, Fail, Outcome, Suppress
from fsmcp.server.loop import MessageLoop, encode_outcome
from fsmcp.server.notifications import NotificationRouter, SessionState
from fsmcp.server.registry import Handler, MethodRegistry, RegistryBuilder
from fsmcp.server.shutdown import ShutdownCoordinator, ShutdownReason, ShutdownState
from fsmcp.server.stdio import LineWriter, read_lines
from fsmcp.server.transcript import TranscriptLog

__all__ = [
    "Dispatcher",
    "Emit",
    "Fail",
    "Handler",
    "InvalidRequest",
    "LineWriter",
    "MessageLoop",
    "MethodRegistry",
    "NotificationRouter",
    "Outcome",
    "RegistryBuilder",
    "ServerConfig",
    "SessionState",
    "ShutdownCoordinator",
    "ShutdownReason",
    "ShutdownState",
    "Suppress",
    "TranscriptLog",
    "classify",
    "encode_outcome",
    "read_lines",
    "rewrite_tool_call",
]
