"""Image I/O using OpenCV, plus conversion to and from interleaved RGB bytes."""

from dataclasses import dataclass
from typing import Optional

import cv2
import numpy as np

from models.channel import Channel, ChannelTag, RGB_TAGS
from models.errors import ChannelMismatchError, DecodeError
from models.image import Image


@dataclass(frozen=True)
class PixelBuffer:
    """Raw row-major pixel bytes as produced by a decoder."""

    width: int
    height: int
    row_stride: int
    data: bytes
    colorspace: str = 'rgb'
    has_alpha: bool = False


def decode_file(path: str) -> Optional[PixelBuffer]:
    """
    Decode a file into an interleaved RGB buffer.

    Returns None when the file decodes to anything other than 8-bit RGB
    without alpha. Raises DecodeError when the file cannot be read at all.
    """
    img = cv2.imread(path, cv2.IMREAD_UNCHANGED)
    if img is None:
        raise DecodeError(path, "file could not be read")
    if img.dtype != np.uint8 or img.ndim != 3 or img.shape[2] != 3:
        return None

    rgb = np.ascontiguousarray(cv2.cvtColor(img, cv2.COLOR_BGR2RGB))
    h, w = rgb.shape[:2]
    return PixelBuffer(width=w, height=h, row_stride=rgb.strides[0], data=rgb.tobytes())


def image_from_pixel_buffer(buffer: PixelBuffer) -> Optional[Image]:
    """Unpack an RGB buffer (honouring row stride padding) into a uint8 image."""
    if buffer.colorspace != 'rgb' or buffer.has_alpha:
        return None

    w, h, stride = buffer.width, buffer.height, buffer.row_stride
    if stride < 3 * w:
        raise DecodeError("<buffer>", f"row stride {stride} is smaller than 3 * width ({3 * w})")
    needed = stride * (h - 1) + 3 * w if h > 0 else 0
    if len(buffer.data) < needed:
        raise DecodeError("<buffer>", f"expected at least {needed} bytes, got {len(buffer.data)}")

    # Last row may omit its padding
    raw = np.zeros(stride * h, dtype=np.uint8)
    available = min(len(buffer.data), raw.size)
    raw[:available] = np.frombuffer(buffer.data, dtype=np.uint8, count=available)
    pixels = raw.reshape(h, stride)[:, :3 * w].reshape(h, w, 3)
    return image_from_array(pixels)


def image_from_array(array: np.ndarray) -> Image:
    """HxWx3 array -> RGB image, HxW array -> GRAY image."""
    if array.ndim == 2:
        return Image.from_channels([Channel(ChannelTag.GRAY, array)])
    if array.ndim == 3 and array.shape[2] == 3:
        return Image.from_channels(
            Channel(tag, array[:, :, idx]) for idx, tag in enumerate(RGB_TAGS)
        )
    raise ValueError(f"Expected HxW or HxWx3 array, got shape {array.shape}")


def image_to_array(image: Image) -> np.ndarray:
    """RGB image -> HxWx3 array; single GRAY image -> HxW array."""
    if all(tag in image for tag in RGB_TAGS):
        return np.stack([image[tag].samples for tag in RGB_TAGS], axis=-1)
    if ChannelTag.GRAY in image:
        return image[ChannelTag.GRAY].samples.copy()
    raise ChannelMismatchError(f"Need RGB or GRAY channels, got {[t.name for t in image.tags]}")


def to_interleaved_rgb(image: Image) -> bytes:
    """Row-major [R, G, B] bytes with stride 3 * width; GRAY is replicated."""
    if image.dtype != np.uint8:
        raise TypeError(f"Interleaved output needs uint8 samples, got {image.dtype}")
    array = image_to_array(image)
    if array.ndim == 2:
        array = np.repeat(array[:, :, np.newaxis], 3, axis=2)
    return np.ascontiguousarray(array).tobytes()


def load_image(path: str) -> Image:
    """Load image as RGB uint8."""
    buffer = decode_file(path)
    if buffer is None:
        raise DecodeError(path, "unsupported colorspace (need 8-bit RGB without alpha)")
    return image_from_pixel_buffer(buffer)


def save_image(image: Image, path: str) -> None:
    """Save RGB or GRAY uint8 image."""
    array = image_to_array(image)
    if array.ndim == 3:
        array = cv2.cvtColor(array, cv2.COLOR_RGB2BGR)
    cv2.imwrite(path, array)
