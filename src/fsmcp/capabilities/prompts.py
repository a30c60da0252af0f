"""Prompt templates: ``prompts/list`` and ``prompts/get``."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from fsmcp.capabilities.base import parse_params
from fsmcp.protocol.errors import INVALID_PARAMS, HandlerError
from fsmcp.protocol.models import PromptArgument, PromptDefinition

_PATH_ARGUMENT = PromptArgument(
    name="path", description="Absolute path inside an allowed directory", required=True
)

PROMPTS: dict[str, tuple[PromptDefinition, str]] = {
    "summarize_directory": (
        PromptDefinition(
            name="summarize_directory",
            description="Summarize what a directory contains",
            arguments=[_PATH_ARGUMENT],
        ),
        "List the directory at {path} with the list_dir tool and summarize "
        "what it contains, grouping files by purpose.",
    ),
    "explain_file": (
        PromptDefinition(
            name="explain_file",
            description="Explain the contents of a file",
            arguments=[_PATH_ARGUMENT],
        ),
        "Read the file at {path} with the read_file tool and explain what it "
        "does.",
    ),
}


class GetPromptParams(BaseModel):
    name: str
    arguments: dict[str, str] = Field(default_factory=dict)


class PromptHandlers:
    def __init__(self, prompts: dict[str, tuple[PromptDefinition, str]] | None = None) -> None:
        self._prompts = PROMPTS if prompts is None else prompts

    def definitions(self) -> list[PromptDefinition]:
        return [definition for definition, _ in self._prompts.values()]

    async def list_prompts(self, params: Any) -> dict[str, Any]:
        return {"prompts": [d.model_dump() for d in self.definitions()]}

    async def get_prompt(self, params: Any) -> dict[str, Any]:
        request = parse_params(GetPromptParams, params)
        entry = self._prompts.get(request.name)
        if entry is None:
            raise HandlerError.from_code(INVALID_PARAMS, f"Prompt not found: {request.name}")
        definition, template = entry

        missing = [
            arg.name
            for arg in definition.arguments
            if arg.required and arg.name not in request.arguments
        ]
        if missing:
            raise HandlerError.from_code(
                INVALID_PARAMS,
                f"Missing required arguments for prompt {request.name}: {', '.join(missing)}",
            )

        return {
            "description": definition.description,
            "messages": [
                {
                    "role": "user",
                    "content": {"type": "text", "text": template.format(**request.arguments)},
                }
            ],
        }
