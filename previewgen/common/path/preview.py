# previewgen/common/path/preview.py
from __future__ import annotations

import os
import tempfile
from pathlib import Path


def preview_path_for(video: Path | str, suffix: str) -> Path:
    """<dir>/<name-without-extension><suffix>, next to the source file."""
    p = Path(video).resolve()
    return p.parent / f"{p.stem}{suffix}"


def write_atomic(data: bytes, out_path: Path) -> Path:
    """
    Write bytes to a temp file beside 'out_path' and swap it in with os.replace,
    so a preview either exists completely or not at all.
    """
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile("wb", suffix=".part", delete=False, dir=str(out_path.parent)) as tf:
        tmp_path = Path(tf.name)
        tf.write(data)
    try:
        os.replace(tmp_path, out_path)
    finally:
        tmp_path.unlink(missing_ok=True)
    return out_path
