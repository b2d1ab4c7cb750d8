from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Tuple
from previewgen.domain.entities.layout import GridLayout


class FrameExtractorPort(Protocol):
    def extract(
        self,
        source: Path,
        interval_sec: float,
        target_width: int,
        target_height: int,
        font_scale: float,          # source height / cell height
        capture_count: int,
        scratch_dir: Path,
    ) -> List[Path]: ...            # sorted, oldest frame first


class ContactSheetPort(Protocol):
    def composite(
        self,
        snapshots: Sequence[Path],
        layout: GridLayout,
        canvas_size: Tuple[int, int],
        border_width: int,
        label: Optional[str] = None,
    ) -> bytes: ...                 # encoded JPEG
