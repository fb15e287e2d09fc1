"""Tests for decoding, pixel buffers and interleaved RGB output."""

import cv2
import numpy as np
import pytest
from models.channel import ChannelTag
from models.errors import DecodeError
from models.image import Image
from utils.image_io import (
    PixelBuffer,
    decode_file,
    image_from_pixel_buffer,
    load_image,
    save_image,
    to_interleaved_rgb,
)


def test_pixel_buffer_with_row_padding():
    """Row stride padding bytes are skipped."""
    data = bytes([1, 2, 3, 4, 5, 6, 0, 0,
                  7, 8, 9, 10, 11, 12, 0, 0])
    image = image_from_pixel_buffer(PixelBuffer(width=2, height=2, row_stride=8, data=data))
    assert image.tags == (ChannelTag.RED, ChannelTag.GREEN, ChannelTag.BLUE)
    assert np.array_equal(image[ChannelTag.RED].samples, [[1, 4], [7, 10]])
    assert np.array_equal(image[ChannelTag.BLUE].samples, [[3, 6], [9, 12]])


def test_pixel_buffer_unsupported_layout():
    """Alpha or non-RGB buffers give no image rather than an exception."""
    data = bytes(16)
    assert image_from_pixel_buffer(PixelBuffer(2, 2, 8, data, has_alpha=True)) is None
    assert image_from_pixel_buffer(PixelBuffer(2, 2, 8, data, colorspace='gray')) is None


def test_pixel_buffer_too_short():
    with pytest.raises(DecodeError):
        image_from_pixel_buffer(PixelBuffer(2, 2, 6, bytes(5)))


def test_interleaved_rgb_layout():
    """Output is row-major [R, G, B] with stride 3 * width."""
    image = Image.rgb(2, 1)
    image[ChannelTag.RED].samples[:] = [[1, 4]]
    image[ChannelTag.GREEN].samples[:] = [[2, 5]]
    image[ChannelTag.BLUE].samples[:] = [[3, 6]]
    assert to_interleaved_rgb(image) == bytes([1, 2, 3, 4, 5, 6])


def test_interleaved_rgb_requires_uint8():
    with pytest.raises(TypeError):
        to_interleaved_rgb(Image.rgb(1, 1, dtype=np.float32))


def test_decode_rgb_file(tmp_path):
    """A 3-channel file decodes to RGB order."""
    path = str(tmp_path / "rgb.png")
    bgr = np.zeros((2, 3, 3), dtype=np.uint8)
    bgr[:, :, 2] = 200  # red in OpenCV's BGR order
    cv2.imwrite(path, bgr)

    buffer = decode_file(path)
    assert (buffer.width, buffer.height, buffer.row_stride) == (3, 2, 9)
    image = load_image(path)
    assert np.all(image[ChannelTag.RED].samples == 200)
    assert not image[ChannelTag.BLUE].samples.any()


def test_decode_alpha_file_unsupported(tmp_path):
    """Files with alpha are an unsupported format."""
    path = str(tmp_path / "rgba.png")
    cv2.imwrite(path, np.zeros((2, 2, 4), dtype=np.uint8))
    assert decode_file(path) is None
    with pytest.raises(DecodeError):
        load_image(path)


def test_decode_gray_file_unsupported(tmp_path):
    path = str(tmp_path / "gray.png")
    cv2.imwrite(path, np.zeros((2, 2), dtype=np.uint8))
    assert decode_file(path) is None


def test_decode_missing_file(tmp_path):
    with pytest.raises(DecodeError):
        decode_file(str(tmp_path / "missing.png"))


def test_save_load_roundtrip(tmp_path):
    """PNG save then load keeps RGB samples."""
    path = str(tmp_path / "out.png")
    image = Image.rgb(4, 3)
    image[ChannelTag.GREEN].samples[:] = np.arange(12).reshape(3, 4)
    save_image(image, path)
    assert load_image(path).equals(image)
