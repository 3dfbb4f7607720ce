from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Ensure the repo root (containing `fb_poster/`) is importable when pytest
# picks `tests/` as the rootdir (e.g., single-file runs).
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

# Tests never write log files into the repo.
os.environ.setdefault("FB_POSTER_DISABLE_FILE_LOG", "1")


class FakeClipboard:
    """Stands in for pyperclip.copy; optionally fails like a headless box would."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.copied: list[str] = []

    def __call__(self, text: str) -> None:
        if self.fail:
            import pyperclip

            raise pyperclip.PyperclipException("could not find a copy/paste mechanism")
        self.copied.append(text)


@pytest.fixture
def fake_clipboard(monkeypatch: pytest.MonkeyPatch) -> FakeClipboard:
    import fb_poster.clipboard as clipboard

    fake = FakeClipboard()
    monkeypatch.setattr(clipboard.pyperclip, "copy", fake)
    return fake
