"""Error types raised by image operations."""

from typing import Optional, Tuple


class ImageError(Exception):
    """Base class for image engine errors."""


class BoundsError(ImageError, IndexError):
    """A window or offset falls outside the valid grid."""

    def __init__(self, x: int, y: int, width: int, height: int,
                 limits: Optional[Tuple[int, int]] = None):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.limits = limits
        message = f"Window ({x}, {y}, {width}x{height}) out of bounds"
        if limits is not None:
            message += f" for {limits[0]}x{limits[1]} image"
        super().__init__(message)


class ChannelMismatchError(ImageError, ValueError):
    """Images or tiles disagree on channel tags, dtype or shape."""


class DuplicateChannelError(ImageError, ValueError):
    """Two channels of one image share a tag."""


class DecodeError(ImageError, ValueError):
    """A file could not be decoded into an RGB pixel buffer."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not decode {path}: {reason}")


class PreconditionError(ImageError, ValueError):
    """Operation requires a non-empty image."""
