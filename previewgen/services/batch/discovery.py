# previewgen/services/batch/discovery.py
from __future__ import annotations

from pathlib import Path
from typing import List

from previewgen.common.strings.splitters import expand_braces


def sort_key(p: Path) -> tuple[str, str]:
    """Case-insensitive path ordering, ties broken by the exact spelling."""
    s = str(p)
    return s.lower(), s


def find_candidates(folder: Path | str, pattern: str) -> List[Path]:
    """
    Case-insensitive recursive glob below 'folder'. Brace groups such as
    "**/*.{mp4,mkv}" are expanded first. Only regular files are returned, sorted.
    """
    root = Path(folder).resolve()
    found: dict[Path, None] = {}
    for pat in expand_braces(pattern):
        for p in root.glob(pat, case_sensitive=False):
            if p.is_file():
                found.setdefault(p, None)
    return sorted(found, key=sort_key)
