"""Image engines - pure computation, no GUI dependencies."""

from .geometry import check_window, sub_image, paste, copy_resized
from .block_processor import split_into_blocks, merge_blocks, tile_offsets
from .transform_engine import (
    SeparableKernel,
    build_weight_matrix,
    make_operator,
    apply_operator,
    transform,
    transform_tiled,
)
from .dct_engine import alpha, forward_dct_kernel, inverse_dct_kernel, dct2, idct2
from .conversions import sample_range, to_float, to_byte, rgb_to_gray, threshold_mean
from .pipeline import block_transform_roundtrip

__all__ = [
    'check_window',
    'sub_image',
    'paste',
    'copy_resized',
    'split_into_blocks',
    'merge_blocks',
    'tile_offsets',
    'SeparableKernel',
    'build_weight_matrix',
    'make_operator',
    'apply_operator',
    'transform',
    'transform_tiled',
    'alpha',
    'forward_dct_kernel',
    'inverse_dct_kernel',
    'dct2',
    'idct2',
    'sample_range',
    'to_float',
    'to_byte',
    'rgb_to_gray',
    'threshold_mean',
    'block_transform_roundtrip',
]
