"""Shared CLI output formatters and logging setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

if TYPE_CHECKING:
    from fsmcp.protocol.models import PromptDefinition, ResourceDefinition, ToolDefinition

console = Console()
# Server mode owns stdout; diagnostics always go to stderr.
err_console = Console(stderr=True)


def configure_logging(*, verbose: bool = False) -> None:
    """Route the ``fsmcp`` logger hierarchy to stderr through rich."""
    handler = RichHandler(console=err_console, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root = logging.getLogger("fsmcp")
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    root.propagate = False


def print_prompts_table(prompts: list[PromptDefinition]) -> None:
    table = Table(title="Prompts")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Arguments")

    for prompt in prompts:
        args = ", ".join(
            f"{a.name}{'' if a.required else '?'}" for a in prompt.arguments
        ) or "-"
        table.add_row(prompt.name, _truncate(prompt.description), args)

    console.print(table)


def print_resources_table(resources: list[ResourceDefinition]) -> None:
    table = Table(title="Resources")
    table.add_column("Name", style="cyan")
    table.add_column("URI")

    for resource in resources:
        table.add_row(resource.name, resource.uri)

    console.print(table)


def print_tools_table(tools: list[ToolDefinition]) -> None:
    table = Table(title="Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")

    for tool in tools:
        table.add_row(tool.name, _truncate(tool.description))

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
