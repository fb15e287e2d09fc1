"""Shared utilities."""

from .image_io import (
    PixelBuffer,
    decode_file,
    image_from_pixel_buffer,
    image_from_array,
    image_to_array,
    to_interleaved_rgb,
    load_image,
    save_image,
)
from .metrics import compute_psnr, max_abs_error, Timer
from .test_images import generate_constant, generate_colored_checkerboard, generate_thin_stripes, generate_gradient

__all__ = [
    'PixelBuffer',
    'decode_file',
    'image_from_pixel_buffer',
    'image_from_array',
    'image_to_array',
    'to_interleaved_rgb',
    'load_image',
    'save_image',
    'compute_psnr',
    'max_abs_error',
    'Timer',
    'generate_constant',
    'generate_colored_checkerboard',
    'generate_thin_stripes',
    'generate_gradient',
]
