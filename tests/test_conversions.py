"""Tests for sample conversions, grayscale and thresholding."""

import numpy as np
import pytest
from engines.conversions import rgb_to_gray, sample_range, threshold_mean, to_byte, to_float
from models.channel import ChannelTag
from models.errors import ChannelMismatchError, PreconditionError
from models.image import Image
from utils.image_io import image_from_array


def test_byte_float_byte_roundtrip():
    """Every 8-bit value survives uint8 -> float -> uint8 exactly."""
    values = np.arange(256, dtype=np.uint8).reshape(16, 16)
    image = image_from_array(values)
    as_float = to_float(image)
    assert as_float.dtype == np.float32
    assert to_byte(as_float).equals(image)


def test_to_byte_clamps_and_rounds():
    """Out-of-range floats clamp to [0, 255]; fractions round to nearest."""
    image = image_from_array(np.array([[-20.0, 0.4, 99.6], [254.5, 255.2, 1e6]]))
    result = to_byte(image)[ChannelTag.GRAY].samples
    assert result.dtype == np.uint8
    assert np.array_equal(result, [[0, 0, 100], [254, 255, 255]])


def test_to_float_requires_floating_dtype():
    with pytest.raises(TypeError):
        to_float(Image(1, 1, ChannelTag.GRAY), np.int32)


def test_rgb_to_gray_floor_average():
    """gray = (R + G + B) // 3 without uint8 overflow."""
    rgb = np.array([[[10, 20, 31], [255, 255, 255]]], dtype=np.uint8)
    gray = rgb_to_gray(image_from_array(rgb))
    assert gray.tags == (ChannelTag.GRAY,)
    assert gray.dtype == np.uint8
    assert np.array_equal(gray[ChannelTag.GRAY].samples, [[20, 255]])


def test_rgb_to_gray_missing_channel():
    with pytest.raises(ChannelMismatchError):
        rgb_to_gray(Image(2, 2, ChannelTag.RED, ChannelTag.GREEN, dtype=np.uint8))


def test_rgb_to_gray_empty_image():
    with pytest.raises(PreconditionError):
        rgb_to_gray(Image.rgb(0, 0))


def test_threshold_against_mean():
    """Pixels >= truncated mean become max, the rest min."""
    image = image_from_array(np.array([[0, 10], [20, 31]], dtype=np.uint8))
    result = threshold_mean(image)[ChannelTag.GRAY].samples
    # mean 15.25 truncates to 15
    assert np.array_equal(result, [[0, 0], [255, 255]])


def test_threshold_constant_channel_is_all_max():
    """Every pixel equals the mean, so every pixel is set."""
    image = image_from_array(np.full((3, 3), 10, dtype=np.uint8))
    assert np.all(threshold_mean(image)[ChannelTag.GRAY].samples == 255)


def test_threshold_only_extremes_per_channel():
    """Binarization yields only min/max values, channel by channel."""
    rng = np.random.default_rng(0)
    image = image_from_array(rng.integers(0, 256, (6, 7, 3), dtype=np.uint8))
    result = threshold_mean(image)
    for channel in result:
        assert set(np.unique(channel.samples)) <= {0, 255}


def test_threshold_empty_image():
    with pytest.raises(PreconditionError):
        threshold_mean(Image(0, 3, ChannelTag.GRAY, dtype=np.uint8))


def test_sample_range():
    assert sample_range(np.uint8) == (0, 255)
    assert sample_range(np.int16) == (-32768, 32767)
    assert sample_range(np.float32) == (0.0, 255.0)
