"""Tests for the channel/image container."""

import numpy as np
import pytest
from models.channel import Channel, ChannelTag
from models.errors import ChannelMismatchError, DuplicateChannelError
from models.image import Image


def test_construct_zero_filled():
    """New images hold zeroed grids of shape (height, width) for each tag."""
    image = Image(5, 3, ChannelTag.RED, ChannelTag.GREEN)
    assert image.width == 5 and image.height == 3
    assert image.tags == (ChannelTag.RED, ChannelTag.GREEN)
    for channel in image:
        assert channel.samples.shape == (3, 5)
        assert channel.width == 5 and channel.height == 3
        assert not channel.samples.any()


def test_lookup_absent_tag_returns_none():
    """Lookup of a missing tag is a normal outcome, not an error."""
    image = Image.rgb(2, 2)
    assert image.get(ChannelTag.ALPHA) is None
    assert ChannelTag.ALPHA not in image
    assert image.get(ChannelTag.RED) is image[ChannelTag.RED]


def test_duplicate_tag_rejected():
    """Two channels with the same tag are refused at construction."""
    with pytest.raises(DuplicateChannelError):
        Image(2, 2, ChannelTag.GRAY, ChannelTag.GRAY)


def test_non_numeric_dtype_rejected():
    """Sample kind must be an integer or floating dtype."""
    with pytest.raises(TypeError):
        Image(2, 2, ChannelTag.GRAY, dtype=np.bool_)
    with pytest.raises(TypeError):
        Image(2, 2, ChannelTag.GRAY, dtype=object)


def test_from_channels_copies_samples():
    """Images own their grids; the source array is not aliased."""
    data = np.arange(6, dtype=np.float32).reshape(2, 3)
    image = Image.from_channels([Channel(ChannelTag.GRAY, data)])
    data[0, 0] = 99
    assert image[ChannelTag.GRAY].samples[0, 0] == 0
    assert image.dtype == np.float32


def test_from_channels_shape_mismatch():
    """Channels of different shapes cannot form one image."""
    with pytest.raises(ChannelMismatchError):
        Image.from_channels([
            Channel(ChannelTag.RED, np.zeros((2, 2))),
            Channel(ChannelTag.GREEN, np.zeros((2, 3))),
        ])


def test_equals_with_tolerance():
    """equals compares tags, size and samples."""
    a = Image(2, 2, ChannelTag.GRAY)
    b = Image(2, 2, ChannelTag.GRAY)
    b[ChannelTag.GRAY].samples[0, 0] = 1e-6
    assert not a.equals(b)
    assert a.equals(b, atol=1e-5)
    assert not a.equals(Image(2, 2, ChannelTag.RED))


def test_from_channels_duplicate_tag_rejected():
    """from_channels enforces one channel per tag too."""
    with pytest.raises(DuplicateChannelError):
        Image.from_channels([
            Channel(ChannelTag.RED, np.zeros((2, 2))),
            Channel(ChannelTag.RED, np.ones((2, 2))),
        ])


def test_channel_equality_is_identity():
    """Channels compare by identity rather than element-wise arrays."""
    a = Channel(ChannelTag.GRAY, np.zeros((2, 2)))
    b = Channel(ChannelTag.GRAY, np.zeros((2, 2)))
    assert a == a
    assert a != b
    assert len({a, b}) == 2
