"""Tests for filesystem tools and registry wiring."""

from pathlib import Path

import pytest

from fsmcp.capabilities import build_registry
from fsmcp.capabilities.base import PathGuard
from fsmcp.capabilities.tools import FilesystemTools
from fsmcp.protocol.errors import HandlerError, InvalidParamsError
from fsmcp.server.config import ServerConfig


@pytest.fixture
def root(tmp_path: Path) -> Path:
    root = tmp_path / "root"
    root.mkdir()
    (root / "note.txt").write_text("hi", encoding="utf-8")
    (root / "dir").mkdir()
    return root


@pytest.fixture
def tools(root: Path) -> FilesystemTools:
    return FilesystemTools(PathGuard([root]))


def _text(result: dict) -> str:
    return result["content"][0]["text"]


class TestToolsList:
    async def test_definitions_have_schemas(self, tools: FilesystemTools) -> None:
        result = await tools.tools_list(None)
        by_name = {t["name"]: t for t in result["tools"]}
        assert set(by_name) == {"list_dir", "read_file", "write_file", "get_file_info"}
        schema = by_name["write_file"]["inputSchema"]
        assert schema["type"] == "object"
        assert set(schema["required"]) == {"path", "content"}


class TestFilesystemTools:
    async def test_list_dir(self, tools: FilesystemTools, root: Path) -> None:
        result = await tools.list_dir({"path": str(root)})
        assert _text(result) == "[DIR] dir\n[FILE] note.txt"

    async def test_list_dir_on_file(self, tools: FilesystemTools, root: Path) -> None:
        with pytest.raises(HandlerError, match="Not a directory"):
            await tools.list_dir({"path": str(root / "note.txt")})

    async def test_read_file(self, tools: FilesystemTools, root: Path) -> None:
        assert _text(await tools.read_file({"path": str(root / "note.txt")})) == "hi"

    async def test_read_missing_file(self, tools: FilesystemTools, root: Path) -> None:
        with pytest.raises(HandlerError) as info:
            await tools.read_file({"path": str(root / "missing.txt")})
        assert info.value.payload["code"] == -32602

    async def test_write_file(self, tools: FilesystemTools, root: Path) -> None:
        target = root / "new.txt"
        result = await tools.write_file({"path": str(target), "content": "data"})
        assert "Successfully wrote" in _text(result)
        assert target.read_text(encoding="utf-8") == "data"

    async def test_get_file_info(self, tools: FilesystemTools, root: Path) -> None:
        text = _text(await tools.get_file_info({"path": str(root / "note.txt")}))
        assert "type: file" in text
        assert "size: 2" in text

    async def test_path_escape_denied(self, tools: FilesystemTools, root: Path) -> None:
        with pytest.raises(HandlerError, match="Access denied"):
            await tools.read_file({"path": str(root / ".." / "elsewhere.txt")})

    async def test_missing_argument(self, tools: FilesystemTools) -> None:
        with pytest.raises(InvalidParamsError, match="path"):
            await tools.read_file({})


class TestBuildRegistry:
    def test_registers_core_and_collaborator_methods(self, root: Path) -> None:
        registry = build_registry(ServerConfig(allowed_directories=[root]))
        assert set(registry) == {
            "initialize",
            "ping",
            "logging/setLevel",
            "roots/list",
            "prompts/list",
            "prompts/get",
            "resources/list",
            "resources/read",
            "resources/allowed_directories",
            "tools/list",
            "list_dir",
            "read_file",
            "write_file",
            "get_file_info",
        }
        assert "tools/call" not in registry
