"""Server configuration — transcript location, allowed directories, limits."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from fsmcp import __version__

LOG_FILE_ENV = "MCP_LOG_FILE_PATH"
ALLOWED_DIRECTORIES_ENV = "MCP_ALLOWED_DIRECTORIES"
DISPATCH_TIMEOUT_ENV = "FSMCP_DISPATCH_TIMEOUT"

LOG_FILE_NAME = "fsmcp.logs.jsonl"


def default_log_directory(
    platform: str | None = None,
    env: Mapping[str, str] | None = None,
    home: Path | None = None,
) -> Path:
    """Return the conventional per-OS log directory used by MCP hosts.

    * macOS: ``~/Library/Logs/Claude``
    * Windows: ``%LOCALAPPDATA%\\Claude\\logs``
    * other: ``$XDG_STATE_HOME/claude/logs`` (``~/.local/state`` by default)
    """
    platform = platform or sys.platform
    env = os.environ if env is None else env
    home = home or Path.home()

    if platform == "darwin":
        return home / "Library" / "Logs" / "Claude"
    if platform == "win32":
        local = env.get("LOCALAPPDATA")
        base = Path(local) if local else home / "AppData" / "Local"
        return base / "Claude" / "logs"
    state = env.get("XDG_STATE_HOME")
    base = Path(state) if state else home / ".local" / "state"
    return base / "claude" / "logs"


def default_log_file() -> Path:
    return default_log_directory() / LOG_FILE_NAME


class ServerConfig(BaseModel):
    """Runtime settings for ``fsmcp serve``.

    ``dispatch_timeout`` of ``None`` lets every handler run to completion.
    """

    name: str = "fsmcp"
    version: str = __version__
    log_file: Path = Field(default_factory=default_log_file)
    allowed_directories: list[Path] = Field(default_factory=lambda: list[Path]())
    dispatch_timeout: float | None = Field(default=None, gt=0)
    verbose: bool = False

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> ServerConfig:
        """Build a config from environment variables, then apply *overrides*.

        Overrides whose value is ``None`` (or an empty sequence) are ignored so
        CLI options only win when they were actually given.
        """
        env = os.environ if env is None else env
        values: dict[str, Any] = {}

        log_file = env.get(LOG_FILE_ENV)
        if log_file:
            values["log_file"] = Path(log_file)

        allowed = env.get(ALLOWED_DIRECTORIES_ENV)
        if allowed:
            values["allowed_directories"] = [
                Path(part) for part in allowed.split(os.pathsep) if part
            ]

        timeout = env.get(DISPATCH_TIMEOUT_ENV)
        if timeout:
            values["dispatch_timeout"] = float(timeout)

        for key, value in overrides.items():
            if value is None or (isinstance(value, (list, tuple)) and not value):
                continue
            values[key] = list(value) if isinstance(value, tuple) else value

        return cls.model_validate(values)

    def resolved_directories(self) -> list[Path]:
        """Allowed directories as absolute, symlink-resolved paths."""
        return [path.expanduser().resolve() for path in self.allowed_directories]
