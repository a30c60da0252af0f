"""TranscriptLog — append-only JSON-Lines record of raw stdio traffic.

Every line read from stdin and every response line written to stdout is
appended verbatim and flushed immediately, so the file is a complete, ordered
transcript of the session even if the process is killed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO

from fsmcp.protocol.errors import TranscriptError

logger = logging.getLogger(__name__)


class TranscriptLog:
    """Single-writer append target for the session transcript.

    Usage::

        with TranscriptLog(path) as transcript:
            transcript.record(line)
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._file: IO[str] | None = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def closed(self) -> bool:
        return self._file is None

    def __enter__(self) -> TranscriptLog:
        self.open()
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def open(self) -> None:
        """Create parent directories and open the file for appending."""
        if self._file is not None:
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._file = self._path.open("a", encoding="utf-8")
        except OSError as exc:
            msg = f"Cannot open transcript {self._path}: {exc}"
            raise TranscriptError(msg) from exc
        logger.debug("Transcript opened at %s", self._path)

    def record(self, line: str) -> None:
        """Append one line and flush it to the OS."""
        if self._file is None:
            msg = "Transcript not open"
            raise TranscriptError(msg)
        try:
            self._file.write(line + "\n")
            self._file.flush()
        except OSError as exc:
            msg = f"Cannot write transcript {self._path}: {exc}"
            raise TranscriptError(msg) from exc

    def close(self) -> None:
        """Flush and close; safe to call more than once."""
        if self._file is None:
            return
        try:
            self._file.flush()
        finally:
            self._file.close()
            self._file = None
