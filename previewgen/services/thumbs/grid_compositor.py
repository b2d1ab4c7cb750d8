# previewgen/services/thumbs/grid_compositor.py
from __future__ import annotations

import io
import os
from pathlib import Path
from typing import Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from previewgen.common.logging import get_logger
from previewgen.domain.entities.layout import GridLayout
from previewgen.domain.errors import CompositeError
from previewgen.domain.ports.thumbs import ContactSheetPort

logger = get_logger()

FALLBACK_FONTS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/Library/Fonts/Arial Unicode.ttf",
    "C:/Windows/Fonts/arial.ttf",
]


def load_font(family: str, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Loads the given font family and falls back to known fonts, then to Pillow's default."""
    candidates = [family, f"{family}.ttf", f"{family.lower()}.ttf"]
    candidates += [f for f in FALLBACK_FONTS if os.path.exists(f)]
    for font in candidates:
        try:
            return ImageFont.truetype(font, size)
        except OSError:
            continue
    logger.debug("Font %r not found; falling back to default font", family)
    return ImageFont.load_default(size=size)


class GridCompositor(ContactSheetPort):
    def __init__(
        self,
        font: str = "Arial",
        font_size: int = 16,
        quality: int = 100,
        background: str = "black",
        text_color: str = "white",
    ):
        self.font = font
        self.font_size = font_size
        self.quality = quality
        self.background = background
        self.text_color = text_color

    def composite(
        self,
        snapshots: Sequence[Path],
        layout: GridLayout,
        canvas_size: Tuple[int, int],
        border_width: int,
        label: Optional[str] = None,
    ) -> bytes:
        sheet = Image.new("RGB", canvas_size, color=self.background)
        cell_size = (layout.cell_width, layout.cell_height)

        # cells without a snapshot simply stay background
        for idx, snap in enumerate(snapshots[: layout.cells]):
            try:
                with Image.open(snap) as im:
                    tile = im.convert("RGB").resize(cell_size, Image.Resampling.LANCZOS)
            except (OSError, UnidentifiedImageError) as e:
                raise CompositeError(f"Cannot read snapshot {Path(snap).name}: {e}") from e
            sheet.paste(tile, layout.cell_origin(idx, border_width))

        if label:
            draw = ImageDraw.Draw(sheet)
            draw.text(
                (border_width, border_width),
                label,
                fill=self.text_color,
                font=load_font(self.font, self.font_size),
            )

        return self.encode(sheet)

    def encode(self, sheet: Image.Image) -> bytes:
        buf = io.BytesIO()
        try:
            sheet.save(buf, format="JPEG", quality=int(self.quality), subsampling=0, optimize=True)
        except (OSError, ValueError) as e:
            raise CompositeError(f"Creating the buffer failed: {e}") from e
        data = buf.getvalue()
        if not data:
            raise CompositeError("Creating the buffer failed: empty JPEG")
        return data
