import logging
import os
import tempfile
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)

# kitty only deletes a t=t file whose name contains "tty-graphics-protocol"
TEMP_PREFIX = "pic-tty-graphics-protocol."


def get_temp_file(prefix: str = TEMP_PREFIX) -> tuple[BinaryIO, Path]:
    """Create a uniquely named temporary file that outlives its handle."""
    handle = tempfile.NamedTemporaryFile(prefix=prefix, delete=False)
    path = Path(handle.name).resolve()
    logger.debug("allocated transfer file %s", path)
    return handle, path


def save_in_tmp_file(data: bytes, handle: BinaryIO) -> None:
    handle.write(data)
    handle.flush()


def write_pixels(data: bytes, prefix: str = TEMP_PREFIX) -> tuple[BinaryIO, Path]:
    """Write a raw pixel buffer to a fresh temporary file.

    The handle is returned open; close it before telling the terminal to read
    the path if nothing else will be written.
    """
    handle, path = get_temp_file(prefix)
    try:
        save_in_tmp_file(data, handle)
    except BaseException:
        handle.close()
        raise
    return handle, path


def remove_temp_file(path: str | Path) -> None:
    """Delete a transfer file, ignoring failures."""
    try:
        os.unlink(path)
    except OSError as exc:
        logger.debug("could not remove %s: %s", path, exc)
