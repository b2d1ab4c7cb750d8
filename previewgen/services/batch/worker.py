# previewgen/services/batch/worker.py
from __future__ import annotations

from pathlib import Path

from previewgen.common.logging import get_logger
from previewgen.common.path.preview import preview_path_for, write_atomic
from previewgen.domain.dataclasses.options import PreviewOptions
from previewgen.domain.dataclasses.reports import FileOutcome
from previewgen.domain.enums.file_status import FileStatus
from previewgen.domain.errors import NoSnapshotsError, ProbeError
from previewgen.domain.policies.grid_planner import plan_grid
from previewgen.domain.policies.snapshot_scheduler import schedule_snapshots
from previewgen.domain.ports.probe import MediaProbePort
from previewgen.domain.ports.thumbs import ContactSheetPort, FrameExtractorPort
from previewgen.services.thumbs.frame_extractor import scratch_area

logger = get_logger()


class PreviewWorker:
    """
    Turns one video into one preview:
      probe -> grid layout -> capture interval -> snapshots -> contact sheet.
    Raises PreviewError subclasses on soft failures; the runner decides what to do.
    """

    def __init__(
        self,
        *,
        folder: Path,
        options: PreviewOptions,
        probe: MediaProbePort,
        extractor: FrameExtractorPort,
        compositor: ContactSheetPort,
    ) -> None:
        self.folder = folder
        self.options = options
        self.probe = probe
        self.extractor = extractor
        self.compositor = compositor

    def process_one(self, video: Path, index: int = 0) -> FileOutcome:
        opts = self.options

        info = self.probe.probe(video)
        missing = info.missing_fields()
        if missing:
            raise ProbeError(video, missing)

        layout = plan_grid(
            canvas_width=opts.width,
            canvas_height=opts.height,
            columns=opts.columns,
            rows=opts.rows,
            border_width=opts.border_width,
            has_label=opts.has_label,
            label_font_size=opts.font_size,
            aspect_ratio=info.aspect_ratio or 0.0,
            source_height=info.height,
        )
        schedule = schedule_snapshots(info.duration_sec, opts.columns, opts.rows)
        logger.debug(
            "%s: %.2fs %dx%d, capture every %.2fs into %dx%d cells",
            video, info.duration_sec, info.width, info.height,
            schedule.interval_sec, layout.cell_width, layout.cell_height,
        )

        with scratch_area(opts.temp_dir, index) as scratch:
            snapshots = self.extractor.extract(
                video,
                schedule.interval_sec,
                info.width,
                info.height,
                layout.font_scale,
                schedule.capture_count,
                scratch,
            )
            if not snapshots:
                raise NoSnapshotsError(video)
            data = self.compositor.composite(
                snapshots,
                layout,
                (opts.width, opts.height),
                opts.border_width,
                opts.label_for(video, self.folder),
            )

        out_path = write_atomic(data, preview_path_for(video, opts.suffix))
        return FileOutcome(source=video, status=FileStatus.generated, output=out_path)
