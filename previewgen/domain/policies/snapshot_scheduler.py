# previewgen/domain/policies/snapshot_scheduler.py
from __future__ import annotations

from previewgen.domain.entities.schedule import CaptureSchedule
from previewgen.domain.errors import ScheduleError


def schedule_snapshots(duration_sec: float, columns: int, rows: int) -> CaptureSchedule:
    """
    Split the duration into cells+1 chunks; captures fall on the first 'cells'
    chunk boundaries so the last one never lands on the (often corrupt) end of stream.
    """
    cells = columns * rows
    if cells <= 0:
        raise ScheduleError(f"grid {columns}x{rows} has no cells")
    interval = round(duration_sec / (cells + 1), 2)
    if interval <= 0:
        raise ScheduleError(f"duration {duration_sec}s is too short for {cells} snapshots")
    return CaptureSchedule(interval_sec=interval, capture_count=cells)
