"""Command-line entry points for the terminal frame player and the frame splicer."""

import argparse
import sys
from pathlib import Path
from typing import Iterable

from termoplayer.core.errors import FrameDirectoryError, InvalidMediaError, ProcessingError, ValidationError
from termoplayer.main import configure_logging, run_player, run_splice
from termoplayer.settings import LOG_LEVELS, PlayerOptions, env_log_file, env_log_level, env_rasterizer

PASSTHROUGH_FLAG = "--jp2a"

INTERACTIVE_KEYS = """\
interactive keys:
  1 color   2 edges-only   3 invert   4 color depth (none/4/8/24)
  5 border  6 flipx  7 flipy  8 term-fit  9 term-center  0 term-zoom
  x grayscale   y background (none/dark/light)   f fill   p HUD
  r/R g/G b/B   red/green/blue weight -/+ 0.01
  w/W h/H       width +/-2, height +/-1     s  use --size=WxH
  left/right    fps -/+1     up/down  edge threshold +/- 0.01
  q             quit
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="termo",
        description="Play a directory of image frames in the terminal through jp2a.",
        epilog=INTERACTIVE_KEYS,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("directory", type=Path, help="Directory of frame images, played in name order")
    parser.add_argument("-f", dest="fps", default="30", metavar="FPS", help="Frames per second (default: 30)")
    parser.add_argument("-e", dest="edges_only", action="store_true", help="Edges only (threshold 0.10 unless -et)")
    parser.add_argument("-et", dest="edge_threshold", metavar="N", help="Edge threshold 0.00-1.00")
    parser.add_argument("-i", dest="invert", action="store_true", help="Invert brightness")
    parser.add_argument("-c", dest="use_color", action="store_true", help="Enable color")
    parser.add_argument("-nc", dest="use_color", action="store_false", help="Disable color (default)")
    parser.add_argument("-cd", dest="color_depth", metavar="N", help="Color depth (4, 8 or 24)")
    parser.add_argument("-C", dest="chars", metavar="CHARS", help="Characters palette")
    parser.add_argument("-I", dest="interactive", action="store_true", help="Interactive mode")
    parser.add_argument(
        PASSTHROUGH_FLAG,
        dest="extra_options",
        action="append",
        default=[],
        metavar="OPTS",
        help='Extra raw rasterizer options, e.g. "--contrast" (repeatable)',
    )
    parser.add_argument(
        "--rasterizer",
        default=env_rasterizer(),
        help="Rasterizer executable (default: $TERMO_RASTERIZER or jp2a)",
    )
    parser.add_argument(
        "--log-level",
        default=env_log_level(),
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging verbosity (default: $TERMO_LOG_LEVEL or WARNING)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=env_log_file(),
        help="Write logs to this file instead of stderr (default: $TERMO_LOG_FILE)",
    )
    return parser


def bind_passthrough_values(argv: Iterable[str]) -> list[str]:
    """Glue ``--jp2a VALUE`` into ``--jp2a=VALUE`` so values may start with a dash."""

    bound: list[str] = []
    args = iter(argv)
    for arg in args:
        if arg == "--":
            bound.append(arg)
            bound.extend(args)
            break
        if arg == PASSTHROUGH_FLAG:
            value = next(args, None)
            bound.append(arg if value is None else f"{arg}={value}")
            continue
        bound.append(arg)
    return bound


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(bind_passthrough_values(sys.argv[1:] if argv is None else argv))

    try:
        options = PlayerOptions.from_values(**vars(args))
    except ValidationError as exc:
        parser.error(str(exc))

    configure_logging(options.log_level, options.log_file)
    try:
        return run_player(options)
    except FrameDirectoryError as exc:
        print(exc, file=sys.stderr)
        return 1


def build_splice_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="termo-splice",
        description=(
            "Split every video/gif in a folder into frame_NNNNNN.jpg directories under ./frames "
            "(or $frames_path) and index them in FRAMES.md."
        ),
    )
    parser.add_argument("input", type=Path, help="Folder containing media files")
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging verbosity (default: INFO)",
    )
    return parser


def splice_main(argv: list[str] | None = None) -> int:
    parser = build_splice_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if not args.input.is_dir():
        parser.error(f"not a directory: {args.input}")
    try:
        return run_splice(args.input)
    except (InvalidMediaError, ProcessingError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
