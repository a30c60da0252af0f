"""Capability handlers and the registry wiring that exposes them."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fsmcp.capabilities.base import PathGuard
from fsmcp.capabilities.lifecycle import LifecycleHandlers
from fsmcp.capabilities.prompts import PromptHandlers
from fsmcp.capabilities.resources import ResourceHandlers
from fsmcp.capabilities.tools import FilesystemTools
from fsmcp.server.registry import MethodRegistry, RegistryBuilder

if TYPE_CHECKING:
    from fsmcp.server.config import ServerConfig


def build_registry(config: ServerConfig) -> MethodRegistry:
    """Build the immutable method table for *config*."""
    guard = PathGuard(config.allowed_directories)
    lifecycle = LifecycleHandlers(name=config.name, version=config.version, roots=guard.roots)
    prompts = PromptHandlers()
    resources = ResourceHandlers(guard)
    tools = FilesystemTools(guard)

    builder = (
        RegistryBuilder()
        .append("initialize", lifecycle.initialize)
        .append("ping", lifecycle.ping)
        .append("logging/setLevel", lifecycle.logging_set_level)
        .append("roots/list", lifecycle.roots_list)
        .append("prompts/list", prompts.list_prompts)
        .append("prompts/get", prompts.get_prompt)
        .append("resources/list", resources.list_resources)
        .append("resources/read", resources.read_resource)
        .append("resources/allowed_directories", resources.allowed_directories)
        .append("tools/list", tools.tools_list)
    )
    return tools.register(builder).build()


__all__ = [
    "FilesystemTools",
    "LifecycleHandlers",
    "PathGuard",
    "PromptHandlers",
    "ResourceHandlers",
    "build_registry",
]
