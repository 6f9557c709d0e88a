import argparse
import logging
import os
import sys
from pathlib import Path

from termpic.errors import TermpicError
from termpic.geometry import DEFAULT_CELL_SIZE, CellSize
from termpic.kitty import preview
from termpic.options import Action, Options
from termpic.terminal import get_cell_size

logger = logging.getLogger(__name__)


def _cell_size(text: str) -> CellSize:
    try:
        return CellSize.parse(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _non_negative(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return value


def _positive(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Display an image in the terminal using the kitty graphics protocol")
    parser.add_argument("image", nargs="?", help="Path to input image (not needed for clear)")
    parser.add_argument(
        "-a",
        "--action",
        choices=[action.value for action in Action],
        default=None,
        help="What to do (default: load-and-display with --id, display without)",
    )
    parser.add_argument("-i", "--id", type=_positive, default=None, help="Terminal image id to load into or place")
    parser.add_argument("-c", "--cols", type=_positive, default=None, help="Maximum width in columns")
    parser.add_argument("-r", "--rows", type=_positive, default=None, help="Maximum height in rows")
    parser.add_argument("-x", type=_non_negative, default=None, help="Column to draw at (zero-based)")
    parser.add_argument("-y", type=_non_negative, default=None, help="Row to draw at (zero-based)")
    parser.add_argument(
        "-u", "--upscale", action="store_true", default=False, help="Allow enlarging the image to fill cols/rows"
    )
    parser.add_argument(
        "--cell-size",
        type=_cell_size,
        default=None,
        help="Pixel size of a terminal cell as WxH (default: ask the terminal, then $TERMPIC_CELL_SIZE, then 10x20)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Log debug output to stderr")
    return parser


def _default_cell_size() -> CellSize:
    env = os.environ.get("TERMPIC_CELL_SIZE")
    fallback = CellSize.parse(env) if env else DEFAULT_CELL_SIZE
    if not sys.stdout.isatty():
        return fallback
    return get_cell_size(sys.stdout.fileno(), default=fallback)


def options_from_args(parser: argparse.ArgumentParser, args: argparse.Namespace) -> Options:
    if args.action is not None:
        action = Action.from_name(args.action)
    else:
        action = Action.LOAD_AND_DISPLAY if args.id is not None else Action.DISPLAY

    path = None
    if action is not Action.CLEAR:
        if args.image is None:
            parser.error(f"an image path is required for {action.value}")
        path = Path(args.image)

    try:
        cell_size = args.cell_size if args.cell_size is not None else _default_cell_size()
    except ValueError as exc:
        parser.error(f"TERMPIC_CELL_SIZE: {exc}")

    return Options(
        path=path,
        action=action,
        id=args.id,
        cols=args.cols,
        rows=args.rows,
        x=args.x,
        y=args.y,
        upscale=args.upscale,
        cell_size=cell_size,
    )


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, stream=sys.stderr)

    options = options_from_args(parser, args)
    if options.path is not None and not options.path.exists():
        print(f"File not found: {options.path}", file=sys.stderr)
        sys.exit(1)

    logger.debug("cell size %dx%d", *options.cell_size)
    try:
        preview(sys.stdout.buffer, options)
    except (TermpicError, OSError) as exc:
        print(f"termpic: {exc}", file=sys.stderr)
        sys.exit(1)
