# tests/conftest.py
from __future__ import annotations
import os
from pathlib import Path
from typing import Callable, List, Sequence

import pytest
from PIL import Image

from previewgen.common import settings as settings_mod


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    # never pick up a developer's environment or cached settings
    for key in list(os.environ):
        if key.upper().startswith("PREVIEWGEN_"):
            monkeypatch.delenv(key, raising=False)
    settings_mod.get_settings.cache_clear()
    yield
    settings_mod.get_settings.cache_clear()


class ScriptedRunner:
    """
    Stand-in for FFmpegRunner. 'script' maps the argument list to the text
    ffmpeg would have printed; every call is recorded.
    """

    def __init__(self, script: Callable[[List[str]], str], available: bool = True):
        self.script = script
        self.available = available
        self.calls: List[List[str]] = []

    def run(self, args: Sequence[str | Path]) -> str:
        args = [str(a) for a in args]
        self.calls.append(args)
        return self.script(args)

    def is_available(self) -> bool:
        return self.available


@pytest.fixture()
def scripted_runner():
    return ScriptedRunner


@pytest.fixture()
def make_video(tmp_path):
    def _make(rel: str, size: int = 2048) -> Path:
        p = tmp_path / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(b"\0" * size)
        return p
    return _make


@pytest.fixture()
def make_snapshot():
    def _make(path: Path, color=(255, 0, 0), size=(64, 36)) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new("RGB", size, color=color).save(path, format="JPEG", quality=95)
        return path
    return _make
