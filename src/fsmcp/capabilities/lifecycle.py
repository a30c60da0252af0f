"""Core MCP methods: ``initialize``, ``ping``, ``logging/setLevel``, ``roots/list``."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from fsmcp.capabilities.base import parse_params

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"

McpLogLevel = Literal[
    "debug", "info", "notice", "warning", "error", "critical", "alert", "emergency"
]

_LOG_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "notice": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "alert": logging.CRITICAL,
    "emergency": logging.CRITICAL,
}


class InitializeParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    protocol_version: str = Field(default=PROTOCOL_VERSION, alias="protocolVersion")
    capabilities: dict[str, Any] = Field(default_factory=dict)
    client_info: dict[str, Any] | None = Field(default=None, alias="clientInfo")


class SetLevelParams(BaseModel):
    level: McpLogLevel


class LifecycleHandlers:
    """Session handshake, liveness and logging control."""

    def __init__(self, *, name: str, version: str, roots: list[Path]) -> None:
        self._name = name
        self._version = version
        self._roots = roots

    async def initialize(self, params: Any) -> dict[str, Any]:
        request = parse_params(InitializeParams, params)
        client = (request.client_info or {}).get("name", "unknown")
        logger.info(
            "Initialize from %s (protocol %s)", client, request.protocol_version
        )
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {
                "logging": {},
                "prompts": {"listChanged": False},
                "resources": {"subscribe": False, "listChanged": False},
                "tools": {"listChanged": False},
            },
            "serverInfo": {"name": self._name, "version": self._version},
        }

    async def ping(self, params: Any) -> dict[str, Any]:
        return {}

    async def logging_set_level(self, params: Any) -> dict[str, Any]:
        request = parse_params(SetLevelParams, params)
        logging.getLogger("fsmcp").setLevel(_LOG_LEVELS[request.level])
        logger.info("Log level set to %s", request.level)
        return {}

    async def roots_list(self, params: Any) -> dict[str, Any]:
        return {
            "roots": [
                {"uri": root.as_uri(), "name": root.name or str(root)}
                for root in self._roots
            ]
        }
