"""``fsmcp info`` — print the prompts, resources and tools the server exposes."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import click

from fsmcp.cli_commands._output import (
    console,
    print_prompts_table,
    print_resources_table,
    print_tools_table,
)


@click.command()
@click.option("--prompts", is_flag=True, help="List prompts.")
@click.option("--resources", is_flag=True, help="List resources.")
@click.option("--tools", is_flag=True, help="List tools.")
@click.option(
    "--allow",
    "allowed",
    multiple=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Allowed directory used to enumerate resources (repeatable).",
)
def info(prompts: bool, resources: bool, tools: bool, allowed: tuple[Path, ...]) -> None:
    """Show what the server would expose, without starting it."""
    from fsmcp.capabilities import build_registry
    from fsmcp.protocol.models import PromptDefinition, ResourceDefinition, ToolDefinition
    from fsmcp.server.config import ServerConfig

    if not (prompts or resources or tools):
        console.print("Please use --help to see available options")
        return

    config = ServerConfig.from_env(allowed_directories=allowed)
    registry = build_registry(config)

    def _call(method: str) -> Any:
        return asyncio.run(registry.resolve(method)(None))

    if prompts:
        result = _call("prompts/list")
        print_prompts_table([PromptDefinition.model_validate(p) for p in result["prompts"]])

    if resources:
        result = _call("resources/list")
        print_resources_table(
            [ResourceDefinition.model_validate(r) for r in result["resources"]]
        )

    if tools:
        result = _call("tools/list")
        print_tools_table([ToolDefinition.model_validate(t) for t in result["tools"]])
