import fcntl
import os
import struct
import sys
import termios

from termpic.geometry import DEFAULT_CELL_SIZE, CellSize


def get_cell_size(fd: int | None = None, default: CellSize = DEFAULT_CELL_SIZE) -> CellSize:
    """Return the pixel size of one cell as reported by TIOCGWINSZ, or ``default``."""
    if fd is None:
        fd = sys.stdout.fileno()
    if not os.isatty(fd):
        return default
    try:
        packed = fcntl.ioctl(fd, termios.TIOCGWINSZ, b"\0" * 8)
    except OSError:
        return default
    rows, cols, xpixels, ypixels = struct.unpack("HHHH", packed)
    # Many terminals leave the pixel fields zero
    if not (rows and cols and xpixels and ypixels):
        return default
    return CellSize(xpixels // cols, ypixels // rows)
