"""Data models: channels, images, errors and run parameters."""

from .channel import Channel, ChannelTag, RGB_TAGS
from .errors import (
    ImageError,
    BoundsError,
    ChannelMismatchError,
    DuplicateChannelError,
    DecodeError,
    PreconditionError,
)
from .image import Image
from .transform_params import TransformParams
from .transform_result import TransformResult

__all__ = [
    'Channel',
    'ChannelTag',
    'RGB_TAGS',
    'ImageError',
    'BoundsError',
    'ChannelMismatchError',
    'DuplicateChannelError',
    'DecodeError',
    'PreconditionError',
    'Image',
    'TransformParams',
    'TransformResult',
]
