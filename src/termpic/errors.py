class TermpicError(Exception):
    """Base class for errors raised while rendering an image."""


class MissingImageIdError(TermpicError, ValueError):
    """An action that stores an image in the terminal was given no id."""


class ImageDecodeError(TermpicError):
    """The source image could not be read or decoded."""


class ImageProbeError(TermpicError):
    """The source image dimensions could not be read."""
