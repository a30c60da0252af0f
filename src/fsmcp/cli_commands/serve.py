"""``fsmcp serve`` — run the MCP server on stdin/stdout."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from fsmcp.cli_commands._output import configure_logging, err_console

if TYPE_CHECKING:
    from fsmcp.server.config import ServerConfig
    from fsmcp.server.transcript import TranscriptLog


@click.command()
@click.option(
    "--allow",
    "allowed",
    multiple=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory the server may access (repeatable).",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Transcript file (default: $MCP_LOG_FILE_PATH or the OS log directory).",
)
@click.option("--timeout", type=float, default=None, help="Per-request handler timeout in seconds.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging on stderr.")
@click.option("--telemetry", is_flag=True, help="Export tracing spans to stderr.")
@click.option(
    "--otlp-endpoint",
    default=None,
    help="Export tracing spans via OTLP/gRPC to this endpoint (e.g. localhost:4317).",
)
def serve(
    allowed: tuple[Path, ...],
    log_file: Path | None,
    timeout: float | None,
    verbose: bool,
    telemetry: bool,
    otlp_endpoint: str | None,
) -> None:
    """Serve MCP JSON-RPC requests read line by line from stdin."""
    from fsmcp.protocol.errors import TranscriptError
    from fsmcp.server.config import ServerConfig
    from fsmcp.server.transcript import TranscriptLog

    configure_logging(verbose=verbose)

    try:
        config = ServerConfig.from_env(
            log_file=log_file,
            allowed_directories=allowed,
            dispatch_timeout=timeout,
            verbose=verbose,
        )
    except ValueError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    if telemetry or otlp_endpoint:
        from fsmcp.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(
                service_name=config.name,
                export_to_console=telemetry,
                otlp_endpoint=otlp_endpoint,
            )
        except ImportError as exc:
            err_console.print(f"[red]Telemetry error:[/red] {exc}")
            sys.exit(1)

    transcript = TranscriptLog(config.log_file)
    try:
        transcript.open()
    except TranscriptError as exc:
        err_console.print(f"[red]Transcript error:[/red] {exc}")
        sys.exit(1)

    asyncio.run(_serve(config, transcript))


async def _serve(config: ServerConfig, transcript: TranscriptLog) -> None:
    from fsmcp.server.app import serve_stdio
    from fsmcp.server.shutdown import ShutdownReason

    reason = await serve_stdio(config, transcript)
    if reason is ShutdownReason.SIGNAL:
        # Exit now; in-flight handlers may still be blocked in worker threads.
        _terminate(0)


def _terminate(code: int) -> None:
    """Flush stdio and logging, then exit without joining worker threads."""
    logging.shutdown()
    for stream in (sys.stdout, sys.stderr):
        with contextlib.suppress(OSError, ValueError):
            stream.flush()
    os._exit(code)
