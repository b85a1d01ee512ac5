from __future__ import annotations

import io
from pathlib import Path
from typing import Dict, List

import pytest


class RecordingStream(io.StringIO):
    """StringIO that counts how often it was closed."""

    def __init__(self, text: str) -> None:
        super().__init__(text)
        self.close_calls = 0

    def close(self) -> None:
        self.close_calls += 1
        super().close()


class RecordingOpener:
    """Fake stream source serving in-memory text for each path."""

    def __init__(self, files: Dict[str, str] | None = None) -> None:
        self.files = files or {}
        self.opened: List[Path] = []
        self.streams: List[RecordingStream] = []

    def __call__(self, path: Path) -> RecordingStream:
        self.opened.append(path)
        stream = RecordingStream(self.files[path.name])
        self.streams.append(stream)
        return stream


@pytest.fixture
def recording_opener() -> RecordingOpener:
    return RecordingOpener()


@pytest.fixture
def write_article(tmp_path: Path):
    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
