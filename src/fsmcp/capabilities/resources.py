"""File resources inside the allowed directories.

Implements ``resources/list``, ``resources/read`` and
``resources/allowed_directories``. Resources are the regular files directly
inside each allowed directory, addressed by ``file://`` URIs.
"""

from __future__ import annotations

import asyncio
import base64
import mimetypes
from pathlib import Path
from typing import TYPE_CHECKING, Any
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

from pydantic import BaseModel

from fsmcp.capabilities.base import parse_params
from fsmcp.protocol.errors import INVALID_PARAMS, RESOURCE_NOT_FOUND, HandlerError
from fsmcp.protocol.models import ResourceDefinition

if TYPE_CHECKING:
    from fsmcp.capabilities.base import PathGuard


class ReadResourceParams(BaseModel):
    uri: str


def uri_to_path(uri: str) -> Path:
    parsed = urlparse(uri)
    if parsed.scheme != "file":
        raise HandlerError.from_code(INVALID_PARAMS, f"Unsupported resource URI: {uri}")
    return Path(url2pathname(unquote(parsed.path)))


class ResourceHandlers:
    def __init__(self, guard: PathGuard) -> None:
        self._guard = guard

    def definitions(self) -> list[ResourceDefinition]:
        resources: list[ResourceDefinition] = []
        for root in self._guard.roots:
            if not root.is_dir():
                continue
            for entry in sorted(root.iterdir()):
                if entry.is_file():
                    mime, _ = mimetypes.guess_type(entry.name)
                    resources.append(
                        ResourceDefinition(uri=entry.as_uri(), name=entry.name, mime_type=mime)
                    )
        return resources

    async def list_resources(self, params: Any) -> dict[str, Any]:
        definitions = await asyncio.to_thread(self.definitions)
        return {
            "resources": [
                d.model_dump(by_alias=True, exclude_none=True) for d in definitions
            ]
        }

    async def read_resource(self, params: Any) -> dict[str, Any]:
        request = parse_params(ReadResourceParams, params)
        path = self._guard.resolve(uri_to_path(request.uri))
        if not path.is_file():
            raise HandlerError.from_code(
                RESOURCE_NOT_FOUND, f"Resource not found: {request.uri}"
            )

        data = await asyncio.to_thread(path.read_bytes)
        mime, _ = mimetypes.guess_type(path.name)
        content: dict[str, Any] = {"uri": request.uri}
        try:
            content["text"] = data.decode("utf-8")
            content["mimeType"] = mime or "text/plain"
        except UnicodeDecodeError:
            content["blob"] = base64.b64encode(data).decode("ascii")
            content["mimeType"] = mime or "application/octet-stream"
        return {"contents": [content]}

    async def allowed_directories(self, params: Any) -> dict[str, Any]:
        return {"directories": [str(root) for root in self._guard.roots]}
