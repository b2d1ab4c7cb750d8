# previewgen/domain/dataclasses/options.py
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Optional

from previewgen.domain.enums.label_mode import LabelMode


@dataclass(frozen=True)
class PreviewOptions:
    """Resolved options for one batch run (settings defaults + CLI overrides)."""
    glob_pattern: str = "**/*.{asf,avi,flv,mkv,mov,mpg,mp4,vob,wmv}"
    width: int = 1920
    height: int = 1080
    quality: int = 100
    columns: int = 9
    rows: int = 7
    suffix: str = ".preview.jpg"
    font: str = "Arial"
    font_size: int = 16
    outline_width: int = 1
    temp_dir: Optional[Path] = None
    border_width: int = 2
    overwrite: bool = False
    label_mode: LabelMode = LabelMode.none
    min_size_bytes: int = 1024 * 1024
    workers: int = 1

    @property
    def has_label(self) -> bool:
        return self.label_mode != LabelMode.none

    @property
    def cells(self) -> int:
        return self.columns * self.rows

    @classmethod
    def from_settings(cls, cfg: Any, **overrides: Any) -> "PreviewOptions":
        """Build options from a Settings object; None-valued overrides are ignored."""
        workers = max(1, min(int(cfg.workers or 1), int(cfg.max_workers or 1)))
        base = cls(
            glob_pattern=cfg.glob_pattern,
            width=cfg.width,
            height=cfg.height,
            quality=cfg.quality,
            columns=cfg.columns,
            rows=cfg.rows,
            suffix=cfg.suffix,
            font=cfg.font,
            font_size=cfg.font_size,
            outline_width=cfg.outline_width,
            temp_dir=cfg.temp_dir,
            border_width=cfg.border_width,
            overwrite=bool(cfg.overwrite),
            label_mode=LabelMode(cfg.label_mode),
            min_size_bytes=cfg.min_size_bytes,
            workers=workers,
        )
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "workers" in changes:
            changes["workers"] = max(1, min(int(changes["workers"]), int(cfg.max_workers or 1)))
        return replace(base, **changes) if changes else base

    def label_for(self, video: Path, folder: Path) -> Optional[str]:
        if self.label_mode == LabelMode.absolute:
            return str(Path(video).resolve())
        if self.label_mode == LabelMode.relative:
            return os.path.relpath(Path(video).resolve(), Path(folder).resolve())
        if self.label_mode == LabelMode.filename:
            return Path(video).name
        return None
