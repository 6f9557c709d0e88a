import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image

from termpic.errors import ImageDecodeError, ImageProbeError

logger = logging.getLogger(__name__)

# Bytes per pixel in the RGBA8 layout sent with f=32
CHANNELS = 4


@dataclass
class DecodedImage:
    width: int
    height: int
    pixels: np.ndarray  # (height, width, 4) uint8, RGBA

    @property
    def raw(self) -> bytes:
        """Row-major RGBA bytes with no row padding."""
        return np.ascontiguousarray(self.pixels, dtype=np.uint8).tobytes()

    @classmethod
    def from_image(cls, image: Image.Image) -> "DecodedImage":
        pixels = np.asarray(image.convert("RGBA"), dtype=np.uint8)
        height, width = pixels.shape[:2]
        return cls(width=width, height=height, pixels=pixels)


def decode_image(path: str | Path) -> DecodedImage:
    """Decode an image file into an RGBA8 pixel buffer."""
    try:
        with Image.open(path) as image:
            decoded = DecodedImage.from_image(image)
    except (OSError, ValueError) as exc:
        raise ImageDecodeError(f"Cannot decode {path}: {exc}") from exc
    if decoded.width == 0 or decoded.height == 0:
        raise ImageDecodeError(f"Image has no pixels: {path}")
    logger.debug("decoded %s (%dx%d)", path, decoded.width, decoded.height)
    return decoded


def probe_size(path: str | Path) -> tuple[int, int]:
    """Read (width, height) from the image header without decoding pixel data."""
    try:
        # Image.open is lazy; only the header is parsed until pixels are accessed
        with Image.open(path) as image:
            width, height = image.size
    except (OSError, ValueError) as exc:
        raise ImageProbeError(f"Cannot read size of {path}: {exc}") from exc
    if width == 0 or height == 0:
        raise ImageProbeError(f"Image has no pixels: {path}")
    return width, height
