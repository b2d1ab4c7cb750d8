# previewgen/services/ffmpeg/runner.py
from __future__ import annotations

import re
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from previewgen.common.logging import get_logger
from previewgen.common.settings import get_settings
from previewgen.domain.errors import PreviewError

logger = get_logger()

_VERSION_RE = re.compile(r"ffmpeg version ", re.IGNORECASE)


class FFmpegError(PreviewError):
    """Adapter-level error: ffmpeg could not be executed or did not finish in time."""

    def __init__(self, message: str, output: Optional[str] = None, rc: Optional[int] = None) -> None:
        super().__init__(message)
        self.output = output
        self.rc = rc


class FFmpegRunner:
    """
    Runs ffmpeg and hands back everything it printed (stdout + stderr) as text.

    A non-zero exit status is not treated as an error: several callers probe a
    file precisely by reading ffmpeg's error messages.
    """

    def __init__(self, ffmpeg_bin: Optional[str] = None, timeout_sec: Optional[int] = None):
        cfg = get_settings()
        self.ffmpeg_bin = ffmpeg_bin or cfg.ffmpeg.bin or "ffmpeg"
        self.timeout_sec = timeout_sec if timeout_sec is not None else cfg.ffmpeg.timeout_sec

    def build_cmd(self, args: Sequence[str | Path]) -> List[str]:
        return [self.ffmpeg_bin, *(str(a) for a in args)]

    def run(self, args: Sequence[str | Path]) -> str:
        cmd = self.build_cmd(args)
        logger.debug("ffmpeg cmd: %s", " ".join(shlex.quote(p) for p in cmd))
        try:
            proc = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout_sec,
                check=False,  # callers inspect the text, not the rc
            )
        except subprocess.TimeoutExpired as e:
            raise FFmpegError(f"ffmpeg timed out after {self.timeout_sec}s", output=str(e)) from e
        except OSError as e:
            raise FFmpegError(f"Failed to execute {self.ffmpeg_bin!r} (OS error).", output=str(e)) from e

        combined = ((proc.stdout or "") + (proc.stderr or "")).strip()
        # ffmpeg redraws its status line with bare carriage returns; turn them into real lines
        return combined.replace("\r", "\n")

    def is_available(self) -> bool:
        """True if the configured binary answers `-version` like ffmpeg does."""
        if shutil.which(self.ffmpeg_bin) is None and not Path(self.ffmpeg_bin).exists():
            return False
        try:
            return bool(_VERSION_RE.search(self.run(["-version"])))
        except FFmpegError:
            return False
