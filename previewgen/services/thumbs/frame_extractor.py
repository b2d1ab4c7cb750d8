# previewgen/services/thumbs/frame_extractor.py
from __future__ import annotations

import shutil
import tempfile
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from previewgen.common.logging import get_logger
from previewgen.common.time.timecode import seconds_to_time
from previewgen.domain.ports.thumbs import FrameExtractorPort
from previewgen.services.ffmpeg.runner import FFmpegRunner

logger = get_logger()


@contextmanager
def scratch_area(temp_root: Optional[Path | str] = None, index: int = 0) -> Iterator[Path]:
    """
    Per-file scratch directory for extracted snapshots.
    Without an override a fresh system temp dir is used; it is removed on every exit path.
    """
    if temp_root is None or not str(temp_root).strip():
        path = Path(tempfile.mkdtemp(prefix="previewgen-"))
    else:
        path = Path(temp_root).resolve() / f"{index}-{uuid.uuid4().hex[:21]}"
        path.mkdir(parents=True, exist_ok=True)
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


def _escape_drawtext(text: str) -> str:
    return (
        text.replace("\\", "\\\\")
        .replace(":", "\\:")
        .replace("'", "\\'")
        .replace(",", "\\,")
    )


class FFmpegFrameExtractor(FrameExtractorPort):
    """
    Pulls evenly spaced frames out of a video in a single ffmpeg pass, scaled
    to the source display size and stamped with their own timestamp.
    """

    def __init__(
        self,
        runner: Optional[FFmpegRunner] = None,
        font: str = "Arial",
        font_size: int = 16,
        outline_width: int = 1,
    ):
        self.runner = runner or FFmpegRunner()
        self.font = font
        self.font_size = font_size
        self.outline_width = outline_width

    def build_filter(self, interval_sec: float, target_width: int, target_height: int, font_scale: float) -> str:
        drawtext = ":".join([
            f"font={_escape_drawtext(self.font)}",
            f"fontsize={round(self.font_size * font_scale)}",
            "fontcolor=white",
            f"borderw={round(self.outline_width * font_scale)}",
            "bordercolor=black",
            "x=(w-tw)/2",
            "y=h-th-10",
            "text='%{pts\\:hms}'",
        ])
        return f"fps={1 / interval_sec},scale={target_width}:{target_height},drawtext={drawtext}"

    def build_args(
        self,
        source: Path,
        interval_sec: float,
        target_width: int,
        target_height: int,
        font_scale: float,
        capture_count: int,
        scratch_dir: Path,
    ) -> List[str]:
        # zero padded so that sorting by name restores temporal order
        pattern = scratch_dir / f"%0{len(str(capture_count))}d.jpg"
        return [
            "-i", str(source),
            "-ss", seconds_to_time(interval_sec),
            "-vf", self.build_filter(interval_sec, target_width, target_height, font_scale),
            "-frames:v", str(capture_count),
            str(pattern),
        ]

    def extract(
        self,
        source: Path,
        interval_sec: float,
        target_width: int,
        target_height: int,
        font_scale: float,
        capture_count: int,
        scratch_dir: Path,
    ) -> List[Path]:
        scratch_dir.mkdir(parents=True, exist_ok=True)
        self.runner.run(self.build_args(
            source, interval_sec, target_width, target_height, font_scale, capture_count, scratch_dir,
        ))
        snapshots = self.list_snapshots(scratch_dir)
        logger.debug("%d snapshots extracted from %s", len(snapshots), source)
        return snapshots

    @staticmethod
    def list_snapshots(scratch_dir: Path) -> List[Path]:
        found = [p for p in scratch_dir.iterdir() if p.is_file() and p.suffix.lower() == ".jpg"]
        return sorted(found, key=lambda p: p.name.lower())
