# previewgen/domain/entities/layout.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GridLayout:
    """Pixel geometry of one contact sheet; recomputed per file because the aspect ratio varies."""
    columns: int
    rows: int
    cell_width: int
    cell_height: int
    top_offset: float
    font_scale: float

    @property
    def cells(self) -> int:
        return self.columns * self.rows

    def cell_origin(self, index: int, border_width: int) -> tuple[int, int]:
        """Top-left corner of cell 'index' (row-major)."""
        row, col = divmod(index, self.columns)
        x = border_width + col * (self.cell_width + border_width)
        y = self.top_offset + border_width + row * (self.cell_height + border_width)
        return int(x), int(y)
