# previewgen/domain/errors.py
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional


class PreviewError(RuntimeError):
    """Soft, file-level failure. The batch logs it and moves on to the next file."""

    def __init__(self, message: str, source: Optional[Path | str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.source = Path(source) if source is not None else None


class ProbeError(PreviewError):
    def __init__(self, source: Path | str, missing: Iterable[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Could not retrieve video {', '.join(self.missing)}.", source)


class LayoutError(PreviewError):
    """Impossible canvas/grid combination; a configuration error rather than a file problem."""


class ScheduleError(PreviewError):
    pass


class NoSnapshotsError(PreviewError):
    def __init__(self, source: Path | str) -> None:
        super().__init__("No snapshots have been generated.", source)


class CompositeError(PreviewError):
    pass
