"""Command line entry point: ``facecam``."""

import argparse
import logging
import sys

from facecam.config import (
    DEFAULT_CAMERA_INDEX,
    DEFAULT_FACTOR,
    DEFAULT_MAX_CONSECUTIVE_FAILURES,
    DEFAULT_MIN_SIZE,
    DEFAULT_THRESHOLDS,
    DEFAULT_WINDOW_TITLE,
    DetectorParams,
    PipelineConfig,
)
from facecam.errors import FaceCamError
from facecam.pipeline import FaceCameraPipeline

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="facecam",
        description="Live camera face detection with an MTCNN graph",
    )
    parser.add_argument(
        "--camera-index",
        type=int,
        default=DEFAULT_CAMERA_INDEX,
        help=f"Camera device index (default: {DEFAULT_CAMERA_INDEX})",
    )
    parser.add_argument("--width", type=int, default=None, help="Requested capture width")
    parser.add_argument("--height", type=int, default=None, help="Requested capture height")
    parser.add_argument(
        "--min-size",
        type=float,
        default=DEFAULT_MIN_SIZE,
        help=f"Smallest face size in pixels (default: {DEFAULT_MIN_SIZE:g})",
    )
    parser.add_argument(
        "--thresholds",
        type=float,
        nargs=3,
        metavar=("P", "R", "O"),
        default=list(DEFAULT_THRESHOLDS),
        help="Confidence cutoff per cascade stage (default: %(default)s)",
    )
    parser.add_argument(
        "--factor",
        type=float,
        default=DEFAULT_FACTOR,
        help=f"Pyramid scale factor per stage (default: {DEFAULT_FACTOR})",
    )
    parser.add_argument(
        "--outline",
        action="store_true",
        help="Draw box outlines instead of filled boxes",
    )
    parser.add_argument(
        "--no-mirror",
        action="store_true",
        help="Show the camera image as captured, without the horizontal flip",
    )
    parser.add_argument(
        "--max-failures",
        type=int,
        default=DEFAULT_MAX_CONSECUTIVE_FAILURES,
        help="Give up after this many dropped frames in a row "
        f"(default: {DEFAULT_MAX_CONSECUTIVE_FAILURES})",
    )
    parser.add_argument(
        "--window-title",
        default=DEFAULT_WINDOW_TITLE,
        help=f"Display window title (default: {DEFAULT_WINDOW_TITLE})",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every detected box",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> PipelineConfig:
    detector = DetectorParams(
        min_size=args.min_size,
        thresholds=tuple(args.thresholds),
        factor=args.factor,
    )
    return PipelineConfig(
        camera_index=args.camera_index,
        width=args.width,
        height=args.height,
        window_title=args.window_title,
        filled=not args.outline,
        mirror=not args.no_mirror,
        max_consecutive_failures=args.max_failures,
        detector=detector,
    )


def main(argv=None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    try:
        FaceCameraPipeline.run_with_defaults(config)
    except FaceCamError as e:
        logger.error("%s stage failed: %s", e.stage, e)
        return 1
    except KeyboardInterrupt:
        logger.info("Keyboard Interrupt. Shutting down.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
