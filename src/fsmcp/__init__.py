"""fsmcp — a stdio Model Context Protocol server for local filesystems."""

from __future__ import annotations

__version__ = "0.1.0"
