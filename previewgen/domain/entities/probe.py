# previewgen/domain/entities/probe.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class ProbeResult:
    """
    Normalized, framework-free result of probing one video file.
    Any field left as None means the file could not be characterized
    and must not be processed further.
    """
    duration_sec: Optional[float] = None
    width: Optional[int] = None
    height: Optional[int] = None

    def missing_fields(self) -> List[str]:
        missing = []
        if self.duration_sec is None:
            missing.append("duration")
        if self.width is None:
            missing.append("width")
        if self.height is None:
            missing.append("height")
        return missing

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    @property
    def aspect_ratio(self) -> Optional[float]:
        if not self.width or not self.height:
            return None
        return self.width / self.height
