from pathlib import Path
from types import SimpleNamespace

from previewgen.common.settings import get_settings
from previewgen.domain.dataclasses.options import PreviewOptions
from previewgen.domain.dataclasses.reports import BatchReport, FileOutcome
from previewgen.domain.enums.file_status import FileStatus
from previewgen.domain.enums.label_mode import LabelMode


def test_options_from_settings_defaults():
    opts = PreviewOptions.from_settings(get_settings())
    assert opts == PreviewOptions()
    assert opts.cells == 63
    assert opts.has_label is False


def test_options_overrides_ignore_none_and_cap_workers():
    cfg = get_settings()
    opts = PreviewOptions.from_settings(cfg, width=640, height=None, workers=500)
    assert opts.width == 640
    assert opts.height == cfg.height
    assert opts.workers == cfg.max_workers


def test_options_from_duck_typed_config():
    cfg = SimpleNamespace(
        glob_pattern="*.mp4", width=320, height=240, quality=80, columns=2, rows=2,
        suffix=".jpg", font="DejaVuSans", font_size=12, outline_width=0, temp_dir=None,
        border_width=0, overwrite=True, label_mode="filename", min_size_bytes=0,
        workers=4, max_workers=2,
    )
    opts = PreviewOptions.from_settings(cfg)
    assert opts.label_mode == LabelMode.filename
    assert opts.workers == 2
    assert opts.overwrite is True


def test_label_for_each_mode(tmp_path):
    folder = tmp_path / "videos"
    video = folder / "season 1" / "ep01.mkv"
    assert PreviewOptions().label_for(video, folder) is None
    assert PreviewOptions(label_mode=LabelMode.filename).label_for(video, folder) == "ep01.mkv"
    rel = PreviewOptions(label_mode=LabelMode.relative).label_for(video, folder)
    assert Path(rel) == Path("season 1") / "ep01.mkv"
    absolute = PreviewOptions(label_mode=LabelMode.absolute).label_for(video, folder)
    assert Path(absolute) == video.resolve()


def test_batch_report_counts_outcomes():
    rep = BatchReport()
    rep.record(FileOutcome(Path("a.mp4"), FileStatus.generated, output=Path("a.preview.jpg")))
    rep.record(FileOutcome(Path("b.mp4"), FileStatus.skipped, reason="preview exists"))
    rep.record(FileOutcome(Path("c.mp4"), FileStatus.failed, reason="boom"))
    assert (rep.generated, rep.skipped, rep.errors, rep.done) == (1, 1, 1, 2)
    assert rep.error_details == [("c.mp4", "boom")]
    assert rep.as_dict()["errors"] == 1
