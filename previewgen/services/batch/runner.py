# previewgen/services/batch/runner.py
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Iterable, List, Optional

from previewgen.common.logging import get_logger
from previewgen.common.path.preview import preview_path_for
from previewgen.domain.dataclasses.options import PreviewOptions
from previewgen.domain.dataclasses.reports import BatchReport, FileOutcome
from previewgen.domain.enums.file_status import FileStatus
from previewgen.domain.errors import PreviewError
from previewgen.domain.policies.grid_planner import plan_grid
from previewgen.domain.ports.probe import MediaProbePort
from previewgen.domain.ports.thumbs import ContactSheetPort, FrameExtractorPort
from previewgen.services.batch.discovery import sort_key
from previewgen.services.batch.worker import PreviewWorker
from previewgen.services.ffmpeg.runner import FFmpegRunner
from previewgen.services.probe.ffmpeg_probe import FFmpegProbeAdapter
from previewgen.services.thumbs.frame_extractor import FFmpegFrameExtractor
from previewgen.services.thumbs.grid_compositor import GridCompositor

logger = get_logger()


class BatchRunner:
    def __init__(
        self,
        options: PreviewOptions,
        *,
        runner: Optional[FFmpegRunner] = None,
        probe: Optional[MediaProbePort] = None,
        extractor: Optional[FrameExtractorPort] = None,
        compositor: Optional[ContactSheetPort] = None,
    ) -> None:
        self.options = options
        if probe is None or extractor is None:
            runner = runner or FFmpegRunner()
        self.probe = probe or FFmpegProbeAdapter(runner)
        self.extractor = extractor or FFmpegFrameExtractor(
            runner,
            font=options.font,
            font_size=options.font_size,
            outline_width=options.outline_width,
        )
        self.compositor = compositor or GridCompositor(
            font=options.font,
            font_size=options.font_size,
            quality=options.quality,
        )

    # --- helpers -------------------------------------------------------------

    def validate_layout(self) -> None:
        """Raise LayoutError up front if the canvas cannot hold the grid at all."""
        o = self.options
        plan_grid(o.width, o.height, o.columns, o.rows, o.border_width, o.has_label, o.font_size, 1.0, 1)

    def select(self, candidates: Iterable[Path]) -> tuple[List[Path], List[FileOutcome]]:
        """
        Split candidates into files to process and skipped outcomes.
        Small files rarely hold real video; existing previews are kept unless overwriting.
        """
        selected: List[Path] = []
        skipped: List[FileOutcome] = []
        for video in sorted((Path(c) for c in candidates), key=sort_key):
            if video.stat().st_size <= self.options.min_size_bytes:
                skipped.append(FileOutcome(video, FileStatus.skipped, reason="file too small"))
                continue
            out_path = preview_path_for(video, self.options.suffix)
            if not self.options.overwrite and out_path.exists():
                skipped.append(FileOutcome(video, FileStatus.skipped, output=out_path, reason="preview exists"))
                continue
            selected.append(video)
        return selected, skipped

    def _safe_process(self, worker: PreviewWorker, video: Path, index: int) -> FileOutcome:
        logger.info('Processing "%s".', video)
        try:
            outcome = worker.process_one(video, index)
        except PreviewError as e:
            logger.error('Processing "%s" failed. %s', video, e)
            return FileOutcome(video, FileStatus.failed, reason=str(e))
        except Exception as e:
            logger.exception('Processing "%s" failed unexpectedly.', video)
            return FileOutcome(video, FileStatus.failed, reason=f"{type(e).__name__}: {e}")
        logger.info('Processing "%s" succeeded. The preview "%s" has been generated.', video, outcome.output)
        return outcome

    def _progress(self, done: int, total: int) -> None:
        percent = round(done / total * 100, 2)
        left = total - done
        logger.info(
            "%d of %d (%s%%) video files done. %d of %d (%s%%) video files left.",
            done, total, percent, left, total, round(100 - percent, 2),
        )

    # --- main ---------------------------------------------------------------

    def run(self, candidates: Iterable[Path], folder: Path) -> BatchReport:
        rep = BatchReport()
        rep.start()

        candidates = list(candidates)
        rep.found = len(candidates)
        selected, skipped = self.select(candidates)
        for outcome in skipped:
            rep.record(outcome)
        rep.planned = len(selected)
        logger.info("Found %d video files.", len(selected))

        worker = PreviewWorker(
            folder=Path(folder),
            options=self.options,
            probe=self.probe,
            extractor=self.extractor,
            compositor=self.compositor,
        )
        total = len(selected)

        if self.options.workers <= 1:
            for i, video in enumerate(selected):
                rep.record(self._safe_process(worker, video, i))
                self._progress(i + 1, total)
        else:
            # each task owns its scratch area; the report is only touched on this thread
            with ThreadPoolExecutor(max_workers=self.options.workers) as pool:
                futures = [pool.submit(self._safe_process, worker, video, i) for i, video in enumerate(selected)]
                for done, fut in enumerate(as_completed(futures), start=1):
                    rep.record(fut.result())
                    self._progress(done, total)
            rep.outcomes.sort(key=lambda o: sort_key(o.source))

        rep.stop()
        return rep
