"""Stdio framing — newline-delimited text in, newline-delimited JSON out.

Stdin is pumped by a daemon thread into an :class:`asyncio.Queue`. A read
blocked in that thread never holds up process exit, which lets a termination
signal end the server while the host is still connected.
"""

from __future__ import annotations

import asyncio
import io
import sys
import threading
from collections.abc import AsyncIterator
from typing import IO

_EOF = None


async def read_lines(stream: IO[str] | None = None) -> AsyncIterator[str]:
    """Yield lines from *stream* (default: UTF-8 stdin) without line endings."""
    source = stream if stream is not None else _utf8_stdin()
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue[str | None] = asyncio.Queue()

    def _put(item: str | None) -> None:
        try:
            loop.call_soon_threadsafe(queue.put_nowait, item)
        except RuntimeError:
            # Event loop already closed during shutdown; nobody is listening.
            pass

    def _pump() -> None:
        try:
            for raw in source:
                _put(raw.rstrip("\r\n"))
        finally:
            _put(_EOF)

    threading.Thread(target=_pump, name="fsmcp-stdin", daemon=True).start()

    while True:
        line = await queue.get()
        if line is _EOF:
            return
        yield line


class LineWriter:
    """Writes one line per call to *stream* (default: UTF-8 stdout) and flushes."""

    def __init__(self, stream: IO[str] | None = None) -> None:
        self._stream = stream if stream is not None else _utf8_stdout()

    def __call__(self, line: str) -> None:
        self._stream.write(line + "\n")
        self._stream.flush()


def _utf8_stdin() -> IO[str]:
    if isinstance(sys.stdin, io.TextIOWrapper):
        sys.stdin.reconfigure(encoding="utf-8", errors="replace")
    return sys.stdin


def _utf8_stdout() -> IO[str]:
    if isinstance(sys.stdout, io.TextIOWrapper):
        sys.stdout.reconfigure(encoding="utf-8")
    return sys.stdout
