from typing import NamedTuple


class CellSize(NamedTuple):
    width: int
    height: int

    @classmethod
    def parse(cls, text: str) -> "CellSize":
        """Parse a ``WxH`` string such as ``10x20``."""
        try:
            width, height = (int(part) for part in text.lower().split("x"))
        except ValueError:
            raise ValueError(f"Invalid cell size: {text!r} (expected WxH)") from None
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid cell size: {text!r} (must be positive)")
        return cls(width, height)


# Assumed pixel size of one terminal cell when the terminal doesn't report one
DEFAULT_CELL_SIZE = CellSize(10, 20)


def natural_footprint(width: int, height: int, cell_size: CellSize = DEFAULT_CELL_SIZE) -> tuple[int, int]:
    """Cells covered by the image when drawn one image pixel per screen pixel."""
    cols = max(1, width // cell_size.width)
    rows = max(1, height // cell_size.height)
    return cols, rows


def fit_bounds(
    width: int,
    height: int,
    cols: int | None,
    rows: int | None,
    upscale: bool,
    cell_size: CellSize = DEFAULT_CELL_SIZE,
) -> tuple[int, int]:
    """Return the (columns, rows) footprint to request for a width x height image.

    The image keeps its aspect ratio. The axis whose bound limits the fit is set
    to that bound exactly and the other axis is rounded down, so the result never
    exceeds the requested area. A missing bound leaves that axis unconstrained.
    Without ``upscale`` the result is clamped to the natural footprint.
    """
    natural = natural_footprint(width, height, cell_size)
    if cols is None and rows is None:
        return natural

    cw, ch = cell_size
    # Compare cols / (width / cw) against rows / (height / ch) without floats
    if rows is None or (cols is not None and cols * cw * height <= rows * ch * width):
        enlarges = cols * cw > width
        fitted = (cols, max(1, cols * cw * height // (width * ch)))
    else:
        enlarges = rows * ch > height
        fitted = (max(1, rows * ch * width // (height * cw)), rows)

    if enlarges and not upscale:
        return natural
    return fitted
