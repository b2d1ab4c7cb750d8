# previewgen/domain/entities/schedule.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class CaptureSchedule:
    interval_sec: float
    capture_count: int

    def timestamps(self) -> List[float]:
        """
        The first 'capture_count' of capture_count+1 evenly spaced points.
        Sampling starts at one interval, never at 0, and stops short of the end.
        """
        return [round(self.interval_sec * (i + 1), 2) for i in range(self.capture_count)]
