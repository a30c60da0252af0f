"""Tests for server configuration and log path discovery."""

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from fsmcp.server.config import (
    LOG_FILE_NAME,
    ServerConfig,
    default_log_directory,
)


class TestDefaultLogDirectory:
    def test_macos(self) -> None:
        home = Path("/Users/me")
        assert default_log_directory("darwin", {}, home) == home / "Library/Logs/Claude"

    def test_windows_localappdata(self) -> None:
        result = default_log_directory("win32", {"LOCALAPPDATA": "C:/Local"}, Path("/h"))
        assert result == Path("C:/Local") / "Claude" / "logs"

    def test_windows_fallback(self) -> None:
        home = Path("/h")
        result = default_log_directory("win32", {}, home)
        assert result == home / "AppData" / "Local" / "Claude" / "logs"

    def test_linux_xdg_state(self) -> None:
        result = default_log_directory("linux", {"XDG_STATE_HOME": "/state"}, Path("/h"))
        assert result == Path("/state/claude/logs")

    def test_linux_default(self) -> None:
        home = Path("/home/me")
        result = default_log_directory("linux", {}, home)
        assert result == home / ".local/state/claude/logs"


class TestServerConfig:
    def test_defaults(self) -> None:
        config = ServerConfig.from_env({})
        assert config.log_file.name == LOG_FILE_NAME
        assert config.allowed_directories == []
        assert config.dispatch_timeout is None

    def test_env_values(self, tmp_path: Path) -> None:
        env = {
            "MCP_LOG_FILE_PATH": str(tmp_path / "x.jsonl"),
            "MCP_ALLOWED_DIRECTORIES": os.pathsep.join([str(tmp_path), "/srv"]),
            "FSMCP_DISPATCH_TIMEOUT": "2.5",
        }
        config = ServerConfig.from_env(env)
        assert config.log_file == tmp_path / "x.jsonl"
        assert config.allowed_directories == [tmp_path, Path("/srv")]
        assert config.dispatch_timeout == 2.5

    def test_overrides_win_over_env(self, tmp_path: Path) -> None:
        env = {"MCP_LOG_FILE_PATH": "/env.jsonl", "MCP_ALLOWED_DIRECTORIES": "/env"}
        config = ServerConfig.from_env(
            env, log_file=tmp_path / "cli.jsonl", allowed_directories=(tmp_path,)
        )
        assert config.log_file == tmp_path / "cli.jsonl"
        assert config.allowed_directories == [tmp_path]

    def test_unset_overrides_ignored(self) -> None:
        env = {"MCP_LOG_FILE_PATH": "/env.jsonl"}
        config = ServerConfig.from_env(env, log_file=None, allowed_directories=())
        assert config.log_file == Path("/env.jsonl")

    def test_non_positive_timeout_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ServerConfig.from_env({}, dispatch_timeout=0)

    def test_bad_timeout_env_rejected(self) -> None:
        with pytest.raises(ValueError):
            ServerConfig.from_env({"FSMCP_DISPATCH_TIMEOUT": "soon"})

    def test_resolved_directories_absolute(self, tmp_path: Path) -> None:
        config = ServerConfig(allowed_directories=[tmp_path / "." / "sub" / ".."])
        assert config.resolved_directories() == [tmp_path.resolve()]
