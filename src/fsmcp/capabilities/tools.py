"""Filesystem tools exposed through ``tools/list`` and ``tools/call``.

Each tool is registered in the method registry under its own name, so a
``tools/call`` request is rewritten and dispatched like any other method.
Input schemas are generated from the pydantic params models.
"""

from __future__ import annotations

import asyncio
import logging
import stat
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from fsmcp.capabilities.base import parse_params, text_content
from fsmcp.protocol.errors import INTERNAL_ERROR, INVALID_PARAMS, HandlerError
from fsmcp.protocol.models import ToolDefinition

if TYPE_CHECKING:
    from pathlib import Path

    from fsmcp.capabilities.base import PathGuard
    from fsmcp.server.registry import RegistryBuilder

logger = logging.getLogger(__name__)


class PathParams(BaseModel):
    path: str = Field(description="Absolute path inside an allowed directory")


class WriteFileParams(PathParams):
    content: str = Field(description="Text to write (UTF-8)")


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    params_model: type[BaseModel]

    def definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description,
            input_schema=self.params_model.model_json_schema(),
        )


TOOL_SPECS: tuple[ToolSpec, ...] = (
    ToolSpec("list_dir", "List the entries of a directory", PathParams),
    ToolSpec("read_file", "Read a UTF-8 text file", PathParams),
    ToolSpec("write_file", "Create or overwrite a UTF-8 text file", WriteFileParams),
    ToolSpec("get_file_info", "Show size, type and timestamps of a path", PathParams),
)


class FilesystemTools:
    """Tool handlers confined to the allowed directories of a :class:`PathGuard`."""

    def __init__(self, guard: PathGuard) -> None:
        self._guard = guard
        self._runners: dict[str, Callable[[Any], Awaitable[dict[str, Any]]]] = {
            "list_dir": self.list_dir,
            "read_file": self.read_file,
            "write_file": self.write_file,
            "get_file_info": self.get_file_info,
        }

    def definitions(self) -> list[ToolDefinition]:
        return [spec.definition() for spec in TOOL_SPECS]

    def register(self, builder: RegistryBuilder) -> RegistryBuilder:
        """Append every tool to *builder* under its own method name."""
        for spec in TOOL_SPECS:
            builder.append(spec.name, self._runners[spec.name])
        return builder

    async def tools_list(self, params: Any) -> dict[str, Any]:
        return {
            "tools": [d.model_dump(by_alias=True) for d in self.definitions()]
        }

    async def list_dir(self, params: Any) -> dict[str, Any]:
        request = parse_params(PathParams, params)
        path = self._guard.resolve(request.path)
        if not path.is_dir():
            raise HandlerError.from_code(INVALID_PARAMS, f"Not a directory: {path}")
        entries = await _run_io(lambda: sorted(path.iterdir()), path)
        lines = [f"[DIR] {e.name}" if e.is_dir() else f"[FILE] {e.name}" for e in entries]
        return text_content("\n".join(lines))

    async def read_file(self, params: Any) -> dict[str, Any]:
        request = parse_params(PathParams, params)
        path = self._guard.resolve(request.path)
        text = await _run_io(lambda: path.read_text(encoding="utf-8"), path)
        return text_content(text)

    async def write_file(self, params: Any) -> dict[str, Any]:
        request = parse_params(WriteFileParams, params)
        path = self._guard.resolve(request.path)
        await _run_io(lambda: path.write_text(request.content, encoding="utf-8"), path)
        logger.info("Wrote %d characters to %s", len(request.content), path)
        return text_content(f"Successfully wrote to {path}")

    async def get_file_info(self, params: Any) -> dict[str, Any]:
        request = parse_params(PathParams, params)
        path = self._guard.resolve(request.path)
        info = await _run_io(path.stat, path)
        kind = "directory" if stat.S_ISDIR(info.st_mode) else "file"
        lines = [
            f"type: {kind}",
            f"size: {info.st_size}",
            f"modified: {_isoformat(info.st_mtime)}",
            f"accessed: {_isoformat(info.st_atime)}",
            f"permissions: {stat.filemode(info.st_mode)}",
        ]
        return text_content("\n".join(lines))


async def _run_io(func: Callable[[], Any], path: Path) -> Any:
    """Run blocking filesystem work off the loop, mapping OS errors to handler errors."""
    try:
        return await asyncio.to_thread(func)
    except FileNotFoundError as exc:
        msg = f"No such file or directory: {path}"
        raise HandlerError.from_code(INVALID_PARAMS, msg) from exc
    except UnicodeDecodeError as exc:
        msg = f"Not a UTF-8 text file: {path}"
        raise HandlerError.from_code(INVALID_PARAMS, msg) from exc
    except OSError as exc:
        msg = f"{exc.strerror or exc}: {path}"
        raise HandlerError.from_code(INTERNAL_ERROR, msg) from exc


def _isoformat(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()
