"""Multi-channel image container."""

from typing import Dict, Iterable, Iterator, Optional, Tuple

import numpy as np

from models.channel import Channel, ChannelTag, RGB_TAGS, check_sample_dtype
from models.errors import ChannelMismatchError, DuplicateChannelError


class Image:
    """
    Ordered set of channels sharing width, height and sample dtype.

    Each tag appears at most once. The image owns its grids exclusively:
    arrays handed to ``from_channels`` are copied.

    Example:
        >>> img = Image(4, 2, ChannelTag.GRAY)
        >>> img.get(ChannelTag.GRAY).samples.shape
        (2, 4)
        >>> img.get(ChannelTag.RED) is None
        True
    """

    def __init__(self, width: int, height: int, *tags: ChannelTag, dtype=np.float64):
        if width < 0 or height < 0:
            raise ValueError(f"Image dimensions must be non-negative, got {width}x{height}")
        self._width = width
        self._height = height
        self._dtype = check_sample_dtype(dtype)
        self._channels: Dict[ChannelTag, Channel] = {}
        for tag in tags:
            if tag in self._channels:
                raise DuplicateChannelError(f"Duplicate channel tag: {tag.name}")
            self._channels[tag] = Channel(tag, np.zeros((height, width), dtype=self._dtype))

    @classmethod
    def rgb(cls, width: int, height: int, dtype=np.uint8) -> "Image":
        return cls(width, height, *RGB_TAGS, dtype=dtype)

    @classmethod
    def from_channels(cls, channels: Iterable[Channel]) -> "Image":
        """Build an image from existing channels, copying their samples."""
        channels = list(channels)
        if not channels:
            raise ChannelMismatchError("At least one channel is required")

        first = channels[0]
        for channel in channels[1:]:
            if channel.samples.shape != first.samples.shape:
                raise ChannelMismatchError(
                    f"Channel {channel.tag.name} has shape {channel.samples.shape}, "
                    f"expected {first.samples.shape}"
                )
            if channel.dtype != first.dtype:
                raise ChannelMismatchError(
                    f"Channel {channel.tag.name} has dtype {channel.dtype}, expected {first.dtype}"
                )

        image = cls(first.width, first.height, *(c.tag for c in channels), dtype=first.dtype)
        for channel in channels:
            image._channels[channel.tag].samples[:] = channel.samples
        return image

    @classmethod
    def like(cls, image: "Image", width: int, height: int, dtype=None) -> "Image":
        """Zeroed image with the same tags as ``image``."""
        return cls(width, height, *image.tags, dtype=image.dtype if dtype is None else dtype)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def shape(self) -> Tuple[int, int]:
        """(height, width), numpy order."""
        return (self._height, self._width)

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def tags(self) -> Tuple[ChannelTag, ...]:
        return tuple(self._channels)

    @property
    def channels(self) -> Tuple[Channel, ...]:
        return tuple(self._channels.values())

    @property
    def area(self) -> int:
        return self._width * self._height

    def get(self, tag: ChannelTag) -> Optional[Channel]:
        return self._channels.get(tag)

    def __getitem__(self, tag: ChannelTag) -> Channel:
        return self._channels[tag]

    def __contains__(self, tag: ChannelTag) -> bool:
        return tag in self._channels

    def __iter__(self) -> Iterator[Channel]:
        return iter(self._channels.values())

    def __len__(self) -> int:
        return len(self._channels)

    def equals(self, other: "Image", atol: float = 0.0) -> bool:
        """True when both images have the same tags, size and samples (within atol)."""
        if self.tags != other.tags or self.shape != other.shape:
            return False
        for channel in self:
            theirs = other[channel.tag].samples
            if atol == 0.0:
                if not np.array_equal(channel.samples, theirs):
                    return False
            elif not np.allclose(channel.samples, theirs, rtol=0.0, atol=atol):
                return False
        return True

    def __repr__(self) -> str:
        tags = ", ".join(tag.name for tag in self.tags)
        return f"Image({self._width}x{self._height}, [{tags}], dtype={self._dtype})"
