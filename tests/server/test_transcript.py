"""Tests for the append-only line transcript."""

from pathlib import Path

import pytest

from fsmcp.protocol.errors import TranscriptError
from fsmcp.server.transcript import TranscriptLog


class TestTranscriptLog:
    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        path = tmp_path / "a" / "b" / "session.jsonl"
        with TranscriptLog(path) as transcript:
            transcript.record('{"id":1}')
        assert path.read_text(encoding="utf-8") == '{"id":1}\n'

    def test_appends_across_sessions(self, tmp_path: Path) -> None:
        path = tmp_path / "session.jsonl"
        with TranscriptLog(path) as transcript:
            transcript.record("first")
        with TranscriptLog(path) as transcript:
            transcript.record("second")
        assert path.read_text(encoding="utf-8").splitlines() == ["first", "second"]

    def test_record_is_flushed_immediately(self, tmp_path: Path) -> None:
        path = tmp_path / "session.jsonl"
        transcript = TranscriptLog(path)
        transcript.open()
        transcript.record("line")
        assert path.read_text(encoding="utf-8") == "line\n"
        transcript.close()

    def test_close_is_idempotent(self, tmp_path: Path) -> None:
        transcript = TranscriptLog(tmp_path / "t.jsonl")
        transcript.open()
        transcript.close()
        transcript.close()
        assert transcript.closed

    def test_record_without_open_raises(self, tmp_path: Path) -> None:
        transcript = TranscriptLog(tmp_path / "t.jsonl")
        with pytest.raises(TranscriptError, match="not open"):
            transcript.record("x")

    def test_unopenable_path_raises(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")
        transcript = TranscriptLog(blocker / "nested" / "t.jsonl")
        with pytest.raises(TranscriptError, match="Cannot open transcript"):
            transcript.open()

    def test_unicode_preserved(self, tmp_path: Path) -> None:
        path = tmp_path / "t.jsonl"
        with TranscriptLog(path) as transcript:
            transcript.record('{"text":"héllo ✓"}')
        assert "héllo ✓" in path.read_text(encoding="utf-8")
