import logging
import os
from pathlib import Path
from typing import BinaryIO

from termpic.errors import MissingImageIdError
from termpic.geometry import fit_bounds
from termpic.image import decode_image, probe_size
from termpic.options import Action, Options
from termpic.protocol import control_data, move_cursor, restore_cursor, save_cursor, send_graphics_command
from termpic.transfer import TEMP_PREFIX, remove_temp_file, write_pixels

logger = logging.getLogger(__name__)

QUIET = 2  # suppress both OK and error responses
RGBA = 32


def _transfer(data: bytes) -> Path:
    handle, path = write_pixels(data, TEMP_PREFIX)
    # Closed before the path is sent so the terminal never reads a partial file
    handle.close()
    return path


def _move_to(stream: BinaryIO, options: Options) -> None:
    if options.positioned:
        save_cursor(stream)
        move_cursor(stream, options.x or 0, options.y or 0)


def _send_transfer(stream: BinaryIO, control: str, path: Path, options: Options | None = None) -> None:
    """Send a command whose payload is ``path``, removing the file if it can't be sent."""
    try:
        if options is not None:
            _move_to(stream, options)
        # Raw filesystem bytes, so undecodable names survive the trip
        send_graphics_command(stream, control, os.fsencode(path))
    except OSError:
        # The terminal was never told about the file; nobody else will delete it
        remove_temp_file(path)
        raise


def clear(stream: BinaryIO) -> None:
    """Delete every image and placement held by the terminal."""
    send_graphics_command(stream, control_data(a="d", d="a"))


def load(stream: BinaryIO, options: Options) -> None:
    """Transmit the image into terminal memory under ``options.id`` without showing it."""
    if options.id is None:
        raise MissingImageIdError("Load requires an image id")
    image = decode_image(options.path)
    path = _transfer(image.raw)
    command = control_data(a="t", t="t", f=RGBA, s=image.width, v=image.height, i=options.id, q=QUIET)
    logger.debug("load id=%s from %s", options.id, path)
    _send_transfer(stream, command, path)


def display(stream: BinaryIO, options: Options) -> None:
    """Show the image, either by placing a loaded id or by sending it whole."""
    if options.id is not None:
        width, height = probe_size(options.path)
        cols, rows = fit_bounds(width, height, options.cols, options.rows, options.upscale, options.cell_size)
        command = control_data(a="p", c=cols, r=rows, i=options.id, q=QUIET)
        logger.debug("display %dx%d cells", cols, rows)
        _move_to(stream, options)
        send_graphics_command(stream, command)
    else:
        image = decode_image(options.path)
        path = _transfer(image.raw)
        cols, rows = fit_bounds(
            image.width, image.height, options.cols, options.rows, options.upscale, options.cell_size
        )
        command = control_data(a="T", t="t", f=RGBA, s=image.width, v=image.height, c=cols, r=rows, q=QUIET)
        logger.debug("display %dx%d cells from %s", cols, rows, path)
        _send_transfer(stream, command, path, options)

    if options.positioned:
        restore_cursor(stream)
    stream.write(b"\n")
    stream.flush()


def load_and_display(stream: BinaryIO, options: Options) -> None:
    # A failed display leaves the loaded image in the terminal, which is harmless
    load(stream, options)
    display(stream, options)


def preview(stream: BinaryIO, options: Options) -> None:
    logger.debug("action %s", options.action.value)
    if options.action is Action.LOAD:
        load(stream, options)
    elif options.action is Action.DISPLAY:
        display(stream, options)
    elif options.action is Action.LOAD_AND_DISPLAY:
        load_and_display(stream, options)
    elif options.action is Action.CLEAR:
        clear(stream)
    else:
        raise ValueError(f"Unknown action: {options.action!r}")
