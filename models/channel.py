"""Channel: one tagged 2D grid of samples."""

from dataclasses import dataclass
from enum import Enum

import numpy as np


class ChannelTag(Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    ALPHA = "alpha"
    GRAY = "gray"


RGB_TAGS = (ChannelTag.RED, ChannelTag.GREEN, ChannelTag.BLUE)


def check_sample_dtype(dtype) -> np.dtype:
    """Normalize dtype, rejecting anything that is not a real integer or float kind."""
    dtype = np.dtype(dtype)
    if dtype == np.bool_ or not (np.issubdtype(dtype, np.integer) or np.issubdtype(dtype, np.floating)):
        raise TypeError(f"Unsupported sample dtype: {dtype}")
    return dtype


@dataclass(frozen=True, eq=False)
class Channel:
    """Tagged sample grid of shape (height, width)."""

    tag: ChannelTag
    samples: np.ndarray

    def __post_init__(self):
        if self.samples.ndim != 2:
            raise ValueError(f"Channel samples must be 2D, got shape {self.samples.shape}")
        check_sample_dtype(self.samples.dtype)

    @property
    def width(self) -> int:
        return self.samples.shape[1]

    @property
    def height(self) -> int:
        return self.samples.shape[0]

    @property
    def dtype(self) -> np.dtype:
        return self.samples.dtype
