# previewgen/services/probe/ffmpeg_probe.py
from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, Optional, Tuple

from previewgen.common.logging import get_logger
from previewgen.common.settings import get_settings
from previewgen.common.time.timecode import seconds_to_time, time_to_seconds
from previewgen.domain.entities.probe import ProbeResult
from previewgen.domain.ports.probe import MediaProbePort
from previewgen.services.ffmpeg.runner import FFmpegRunner

logger = get_logger()

EmptyOutputPredicate = Callable[[str], bool]

_STATS_TIME_RE = re.compile(r"time=(?P<time>\S+)")


def build_report_pattern(path: Path | str) -> re.Pattern[str]:
    """
    Pattern over the `ffmpeg -i <path>` report. In order: input #0 for exactly
    this path, its duration, the video stream, the WxH resolution and then either
    the [SAR x:y DAR w:h] hint or a plain comma.
    """
    return re.compile(
        r"Input #0,"
        r".+?"
        r"'" + re.escape(str(path)) + r"':"
        r".+?"
        r"Duration:\s*(?P<duration>[^,]+),"
        r".+?Video:"
        r".*?"
        r"(?P<width>[1-9][0-9]+)x(?P<height>[1-9][0-9]+)"
        r"(?:"
        r"\s+\[SAR\s+[0-9]+:[0-9]+\s+DAR\s+(?P<dar_w>[0-9]+):(?P<dar_h>[0-9]+)\]"
        r"|"
        r","
        r")",
        re.IGNORECASE | re.DOTALL,
    )


def default_empty_output_predicate(marker: str) -> EmptyOutputPredicate:
    def _is_empty_output_error(text: str) -> bool:
        return marker in text
    return _is_empty_output_error


def _parse_int(x: Optional[str]) -> Optional[int]:
    try:
        if x is None:
            return None
        return int(x)
    except ValueError:
        return None


class FFmpegProbeAdapter(MediaProbePort):
    """
    Determines duration, width and height of a video with ffmpeg alone.

    The container's duration is only trusted if a decode one second before the
    claimed end produces output and a decode one second after it produces none.
    Otherwise the whole file is decoded and the last reported `time=` wins.
    """

    def __init__(
        self,
        runner: Optional[FFmpegRunner] = None,
        is_empty_output_error: Optional[EmptyOutputPredicate] = None,
    ):
        self.runner = runner or FFmpegRunner()
        if is_empty_output_error is None:
            is_empty_output_error = default_empty_output_predicate(get_settings().ffmpeg.empty_output_marker)
        self.is_empty_output_error = is_empty_output_error

    # ---- Port API -------------------------------------------------------------
    def probe(self, path: Path) -> ProbeResult:
        report = self.runner.run(["-i", str(path)])
        duration, width, height = self.parse_report(path, report)

        if duration is not None and not self.confirm_duration(path, duration):
            logger.info("Duration %.2fs of %s could not be confirmed", duration, path)
            duration = None

        # Many streams carry corrupt duration headers; a full decode is slow but reliable.
        if duration is None:
            duration = self.decode_duration(path)

        return ProbeResult(duration_sec=duration, width=width, height=height)

    # ---- Steps -----------------------------------------------------------------
    @staticmethod
    def parse_report(path: Path | str, report: str) -> Tuple[Optional[float], Optional[int], Optional[int]]:
        m = build_report_pattern(path).search(report)
        if m is None:
            return None, None, None

        try:
            duration: Optional[float] = time_to_seconds(m.group("duration"))
        except ValueError:
            duration = None

        width = _parse_int(m.group("width"))
        if width is None:
            return duration, None, None

        dar_w, dar_h = _parse_int(m.group("dar_w")), _parse_int(m.group("dar_h"))
        if dar_w and dar_h:
            # anamorphic streams: display height follows from the display aspect ratio
            height = int(width / dar_w * dar_h)
        else:
            height = _parse_int(m.group("height"))
        return duration, width, height

    def confirm_duration(self, path: Path | str, duration: float) -> bool:
        before = self._null_decode_at(path, duration - 1)
        if self.is_empty_output_error(before):
            return False
        after = self._null_decode_at(path, duration + 1)
        return self.is_empty_output_error(after)

    def decode_duration(self, path: Path | str) -> Optional[float]:
        lines = self.runner.run(["-v", "quiet", "-stats", "-i", str(path), "-f", "null", "-"]).split("\n")
        m = _STATS_TIME_RE.search(lines[-1]) if lines else None
        if m is None:
            return None
        try:
            return time_to_seconds(m.group("time"))
        except ValueError:
            return None

    def _null_decode_at(self, path: Path | str, seconds: float) -> str:
        return self.runner.run(["-i", str(path), "-ss", seconds_to_time(seconds), "-f", "null", "-"])
