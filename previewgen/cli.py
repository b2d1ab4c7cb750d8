# previewgen/cli.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from previewgen import __version__
from previewgen.common.logging import get_logger
from previewgen.common.settings import Settings, get_settings
from previewgen.domain.dataclasses.options import PreviewOptions
from previewgen.domain.enums.label_mode import LabelMode
from previewgen.domain.errors import LayoutError
from previewgen.services.batch.discovery import find_candidates
from previewgen.services.batch.runner import BatchRunner
from previewgen.services.ffmpeg.runner import FFmpegRunner

logger = get_logger()


def positive_int(string: str) -> int:
    """Type parser for argparse. Argument must be an integer >= 1."""
    try:
        value = int(string)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{string!r} is not an integer")
    if value < 1:
        raise argparse.ArgumentTypeError(f"{value} must be at least 1")
    return value


def non_negative_int(string: str) -> int:
    """Type parser for argparse. Argument must be an integer >= 0."""
    try:
        value = int(string)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{string!r} is not an integer")
    if value < 0:
        raise argparse.ArgumentTypeError(f"{value} must not be negative")
    return value


def quality_type(string: str) -> int:
    """Type parser for argparse. Argument must be a JPEG quality between 0 and 100."""
    value = non_negative_int(string)
    if value > 100:
        raise argparse.ArgumentTypeError(f"quality {value} is above 100")
    return value


def build_parser(cfg: Settings) -> argparse.ArgumentParser:
    # -h is the preview height, so help only has the long form
    parser = argparse.ArgumentParser(
        prog="previewgen",
        description="Generate a contact-sheet preview image for every video file below a folder.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        add_help=False,
    )
    parser.add_argument("folder", nargs="?", help="folder to search for video files in")
    parser.add_argument("--help", action="help", help="show this help message and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-g", "--glob", dest="glob_pattern", default=cfg.glob_pattern,
                        help="glob for finding video files")
    parser.add_argument("-w", "--width", type=positive_int, default=cfg.width, help="width of the preview")
    parser.add_argument("-h", "--height", type=positive_int, default=cfg.height, help="height of the preview")
    parser.add_argument("-q", "--quality", type=quality_type, default=cfg.quality,
                        help="jpg quality of the preview")
    parser.add_argument("-c", "--columns", type=positive_int, default=cfg.columns,
                        help="amount of columns in the preview")
    parser.add_argument("-r", "--rows", type=positive_int, default=cfg.rows, help="amount of rows in the preview")
    parser.add_argument("-s", "--suffix", default=cfg.suffix, help="suffix of the preview filename")
    parser.add_argument("-f", "--font", default=cfg.font, help="font for the texts in the preview")
    parser.add_argument("-z", "--font-size", type=positive_int, default=cfg.font_size,
                        help="font size for the texts in the preview")
    parser.add_argument("-l", "--outline-width", type=non_negative_int, default=cfg.outline_width,
                        help="outline width for the texts in the preview")
    parser.add_argument("-t", "--temp", dest="temp_dir", default=cfg.temp_dir,
                        help="folder for temporary files (default: system temp)")
    parser.add_argument("-b", "--border-width", type=non_negative_int, default=cfg.border_width,
                        help="width of the border between the images")
    parser.add_argument("-o", "--overwrite", action="store_true", default=cfg.overwrite,
                        help="overwrite existing files")
    parser.add_argument("-a", "--add-filename", action="store_true",
                        help="add the filename to the top of the preview")
    parser.add_argument("-R", "--add-filename-rel", action="store_true",
                        help="add the relative filename to the top of the preview")
    parser.add_argument("-A", "--add-filename-abs", action="store_true",
                        help="add the absolute filename to the top of the preview")
    parser.add_argument("-j", "--workers", type=positive_int, default=cfg.workers,
                        help=f"video files processed in parallel (max {cfg.max_workers})")
    parser.add_argument("--log-level", default=cfg.log_level, help="logging level")
    return parser


def resolve_label_mode(args: argparse.Namespace, default: LabelMode = LabelMode.none) -> LabelMode:
    """Absolute wins over relative, relative over the bare filename."""
    if args.add_filename_abs:
        return LabelMode.absolute
    if args.add_filename_rel:
        return LabelMode.relative
    if args.add_filename:
        return LabelMode.filename
    return default


def options_from_args(args: argparse.Namespace, cfg: Settings) -> PreviewOptions:
    temp_dir = args.temp_dir
    if temp_dir is not None and not str(temp_dir).strip():
        temp_dir = None
    return PreviewOptions.from_settings(
        cfg,
        glob_pattern=args.glob_pattern,
        width=args.width,
        height=args.height,
        quality=args.quality,
        columns=args.columns,
        rows=args.rows,
        suffix=args.suffix,
        font=args.font,
        font_size=args.font_size,
        outline_width=args.outline_width,
        temp_dir=Path(temp_dir) if temp_dir is not None else None,
        border_width=args.border_width,
        overwrite=args.overwrite,
        label_mode=resolve_label_mode(args, LabelMode(cfg.label_mode)),
        workers=args.workers,
    )


def main(argv: Optional[List[str]] = None, runner: Optional[FFmpegRunner] = None) -> int:
    cfg = get_settings()
    parser = build_parser(cfg)
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        parser.print_help()
        return 0
    args = parser.parse_args(argv)
    if args.folder is None:
        parser.error("the following arguments are required: folder")

    get_logger(level=args.log_level)
    folder = Path(args.folder)
    if not folder.is_dir():
        logger.error('The folder "%s" does not exist.', folder)
        return 1

    runner = runner or FFmpegRunner()
    if not runner.is_available():
        logger.warning("The ffmpeg executable is not installed or not within PATH.")

    options = options_from_args(args, cfg)
    batch = BatchRunner(options, runner=runner)
    try:
        batch.validate_layout()
    except LayoutError as e:
        logger.error("Invalid preview layout: %s", e)
        return 2

    candidates = find_candidates(folder, options.glob_pattern)
    rep = batch.run(candidates, folder)
    logger.info(
        "Done: %d generated, %d skipped, %d failed.", rep.generated, rep.skipped, rep.errors,
    )
    return 0
