# previewgen/domain/policies/grid_planner.py
from __future__ import annotations

import math

from previewgen.domain.entities.layout import GridLayout
from previewgen.domain.errors import LayoutError

# Line height of the filename label relative to its font size.
LABEL_LINE_FACTOR = 1.2


def plan_grid(
    canvas_width: int,
    canvas_height: int,
    columns: int,
    rows: int,
    border_width: int,
    has_label: bool,
    label_font_size: int,
    aspect_ratio: float,
    source_height: int,
) -> GridLayout:
    """
    Fit columns x rows cells into the canvas, keeping the source aspect ratio.

    The grid is first fitted to the available width; if the resulting rows
    overflow the available height, it is refitted to the height instead.
    Cells are never stretched and the grid never leaves the canvas.
    """
    if columns <= 0 or rows <= 0:
        raise LayoutError(f"grid must have at least one column and row (got {columns}x{rows})")
    if aspect_ratio <= 0:
        raise LayoutError(f"invalid aspect ratio {aspect_ratio}")

    top_offset = label_font_size * LABEL_LINE_FACTOR + border_width if has_label else 0
    avail_w = canvas_width - (columns + 1) * border_width
    avail_h = canvas_height - ((rows + 1) * border_width + top_offset)
    if avail_w <= 0 or avail_h <= 0:
        raise LayoutError(
            f"canvas {canvas_width}x{canvas_height} has no room for a {columns}x{rows} grid "
            f"with border {border_width}"
        )

    cell_w = math.floor(avail_w / columns)
    cell_h = math.floor(cell_w / aspect_ratio)

    if rows * cell_h > avail_h:
        cell_h = math.floor(avail_h / rows)
        cell_w = math.floor(cell_h * aspect_ratio)

    if cell_w <= 0 or cell_h <= 0:
        raise LayoutError(
            f"cells collapse to {cell_w}x{cell_h} on a {canvas_width}x{canvas_height} canvas"
        )

    return GridLayout(
        columns=columns,
        rows=rows,
        cell_width=cell_w,
        cell_height=cell_h,
        top_offset=top_offset,
        font_scale=source_height / cell_h,
    )
