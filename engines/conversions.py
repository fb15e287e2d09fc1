"""Sample kind conversion, grayscale reduction and mean thresholding."""

from typing import Tuple

import numpy as np

from models.channel import ChannelTag, RGB_TAGS
from models.errors import ChannelMismatchError, PreconditionError
from models.image import Image


def sample_range(dtype) -> Tuple[float, float]:
    """(min, max) sample values; floating images use the 8-bit working range."""
    dtype = np.dtype(dtype)
    if np.issubdtype(dtype, np.integer):
        info = np.iinfo(dtype)
        return info.min, info.max
    return 0.0, 255.0


def to_float(image: Image, dtype=np.float32) -> Image:
    """Exact cast of every sample to a floating dtype."""
    if not np.issubdtype(np.dtype(dtype), np.floating):
        raise TypeError(f"Expected a floating dtype, got {np.dtype(dtype)}")
    result = Image.like(image, image.width, image.height, dtype=dtype)
    for channel in image:
        result[channel.tag].samples[:] = channel.samples
    return result


def to_byte(image: Image) -> Image:
    """Round to nearest and clamp to [0, 255] before casting to uint8."""
    result = Image.like(image, image.width, image.height, dtype=np.uint8)
    for channel in image:
        result[channel.tag].samples[:] = np.clip(np.rint(channel.samples), 0, 255)
    return result


def _require_area(image: Image, operation: str) -> None:
    if image.area == 0:
        raise PreconditionError(f"{operation} requires a non-empty image, got {image.width}x{image.height}")


def rgb_to_gray(image: Image) -> Image:
    """Average R, G and B per pixel (floor division) into a single GRAY channel."""
    _require_area(image, "rgb_to_gray")
    missing = [tag.name for tag in RGB_TAGS if tag not in image]
    if missing:
        raise ChannelMismatchError(f"rgb_to_gray needs RED, GREEN and BLUE; missing {missing}")

    R, G, B = (image[tag].samples for tag in RGB_TAGS)
    gray = Image(image.width, image.height, ChannelTag.GRAY, dtype=image.dtype)
    if np.issubdtype(image.dtype, np.integer):
        total = R.astype(np.int64) + G.astype(np.int64) + B.astype(np.int64)
        gray[ChannelTag.GRAY].samples[:] = total // 3
    else:
        gray[ChannelTag.GRAY].samples[:] = np.floor((R + G + B) / 3)
    return gray


def threshold_mean(image: Image) -> Image:
    """Binarize each channel against its truncated mean: >= mean -> max, else min."""
    _require_area(image, "threshold_mean")
    low, high = sample_range(image.dtype)
    result = Image.like(image, image.width, image.height)
    for channel in image:
        mean = np.trunc(channel.samples.mean(dtype=np.float64))
        result[channel.tag].samples[:] = np.where(channel.samples >= mean, high, low)
    return result
