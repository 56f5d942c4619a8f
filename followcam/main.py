"""FollowCam — bake the cursor-following camera path of a recording."""

import argparse
import csv
import json
import logging
import sys
from typing import List, Optional, TextIO

from app.exporter import sample_transforms
from app.layout import fit_frame
from app.models import DEFAULT_FPS
from app.project_file import load_project
from app.version import __version__

logging.basicConfig(
    level=logging.INFO,
    format="%(name)s | %(levelname)s | %(message)s",
)

_logger = logging.getLogger(__name__)

CSV_FIELDS = ["time", "scale", "translateX", "translateY", "transformOrigin"]


def _global_exception_handler(exc_type, exc_value, exc_tb):
    """Log unhandled exceptions instead of crashing silently."""
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_tb)
        return
    _logger.critical("Unhandled exception", exc_info=(exc_type, exc_value, exc_tb))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="followcam",
        description="Sample the zoom camera transform of a project at a fixed frame rate.",
    )
    parser.add_argument("project", help="path to a project JSON file")
    parser.add_argument("--width", type=int, default=1920, help="output canvas width (px)")
    parser.add_argument("--height", type=int, default=1080, help="output canvas height (px)")
    parser.add_argument("--fps", type=float, default=DEFAULT_FPS, help="frames per second")
    parser.add_argument("--padding", type=float, default=0.0, help="frame padding (%% of canvas)")
    parser.add_argument("--start", type=float, default=0.0, help="first frame time (s)")
    parser.add_argument("--end", type=float, default=None, help="last frame time (s)")
    parser.add_argument("--format", choices=("csv", "json"), default="csv")
    parser.add_argument("-o", "--output", default="-", help="output file ('-' for stdout)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def write_rows(rows, fmt: str, out: TextIO) -> None:
    """Write transform rows as CSV (with header) or a JSON array."""
    if fmt == "json":
        json.dump(list(rows), out, indent=2)
        out.write("\n")
        return
    writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
    writer.writeheader()
    for row in rows:
        writer.writerow(row)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point — returns the process exit code."""
    sys.excepthook = _global_exception_handler
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.fps <= 0:
        parser.error("--fps must be positive")

    try:
        project = load_project(args.project)
    except ValueError as exc:
        _logger.error("Cannot load project: %s", exc)
        return 1

    video = project.video_dimensions
    layout = fit_frame(args.width, args.height, video.width, video.height, args.padding)
    track = sample_transforms(
        project.regions,
        project.samples,
        project.recording,
        layout.content,
        fps=args.fps,
        start=args.start,
        end=args.end,
        settings=project.settings,
    )

    if args.output == "-":
        write_rows(track.to_rows(), args.format, sys.stdout)
    else:
        with open(args.output, "w", encoding="utf-8", newline="") as f:
            write_rows(track.to_rows(), args.format, f)
        _logger.info("Wrote %d frames to %s", len(track), args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
