"""Helpers shared by capability handlers."""

from __future__ import annotations

from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from fsmcp.protocol.errors import INVALID_PARAMS, HandlerError, InvalidParamsError

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_params(model: type[ModelT], params: Any) -> ModelT:
    """Validate raw request params into *model*.

    ``None`` is treated as an empty object so parameterless calls work for
    models whose fields all have defaults.
    """
    try:
        return model.model_validate({} if params is None else params)
    except ValidationError as exc:
        raise InvalidParamsError.from_validation(exc) from exc


def text_content(text: str) -> dict[str, Any]:
    """Wrap *text* in an MCP tool result."""
    return {"content": [{"type": "text", "text": text}]}


class PathGuard:
    """Confines filesystem access to a set of allowed root directories."""

    def __init__(self, roots: list[Path]) -> None:
        self._roots = [root.expanduser().resolve() for root in roots]

    @property
    def roots(self) -> list[Path]:
        return list(self._roots)

    def resolve(self, raw: str | Path) -> Path:
        """Resolve *raw* and ensure it lies inside an allowed directory."""
        candidate = Path(raw).expanduser().resolve()
        for root in self._roots:
            if candidate == root or candidate.is_relative_to(root):
                return candidate
        raise HandlerError.from_code(
            INVALID_PARAMS,
            f"Access denied - path outside allowed directories: {candidate}",
        )
