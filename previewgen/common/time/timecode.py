# previewgen/common/time/timecode.py
from __future__ import annotations


def time_to_seconds(value: str) -> float:
    """
    Parse "HH:MM:SS.ss" (or "MM:SS", "SS") into seconds.
    Raises ValueError for anything ffmpeg prints in place of a time, e.g. "N/A".
    """
    parts = value.strip().split(":")
    total = 0.0
    for i, part in enumerate(reversed(parts)):
        total += float(part) * (60 ** i)
    if total != total:  # NaN
        raise ValueError(f"not a time value: {value!r}")
    return total


def seconds_to_time(seconds: float) -> str:
    """Format seconds as "HH:MM:SS.ss" for ffmpeg's -ss option (negative clamps to zero)."""
    centis = max(0, int(round(seconds * 100)))
    hours, rem = divmod(centis, 360_000)
    minutes, rem = divmod(rem, 6_000)
    return f"{hours:02d}:{minutes:02d}:{rem / 100:05.2f}"
