"""Metrics: PSNR, reconstruction error and phase timing."""

import time

import numpy as np
from skimage.metrics import peak_signal_noise_ratio

from models.errors import ChannelMismatchError
from models.image import Image


def _stack(image: Image) -> np.ndarray:
    return np.stack([channel.samples.astype(np.float64) for channel in image])


def _check_comparable(original: Image, reconstructed: Image) -> None:
    if original.tags != reconstructed.tags or original.shape != reconstructed.shape:
        raise ChannelMismatchError(f"Cannot compare {original!r} with {reconstructed!r}")


def compute_psnr(original: Image, reconstructed: Image, data_range: float = 255.0) -> float:
    """PSNR over all channels; inf when the images are identical."""
    _check_comparable(original, reconstructed)
    reference = _stack(original)
    test = _stack(reconstructed)
    if np.array_equal(reference, test):
        return float('inf')
    return float(peak_signal_noise_ratio(reference, test, data_range=data_range))


def max_abs_error(original: Image, reconstructed: Image) -> float:
    """Largest absolute per-sample difference across channels."""
    _check_comparable(original, reconstructed)
    if original.area == 0:
        return 0.0
    return float(np.max(np.abs(_stack(original) - _stack(reconstructed))))


class Timer:
    """Simple timer for forward/inverse runtime."""
    
    def __init__(self):
        self.forward_time_ms = 0.0
        self.inverse_time_ms = 0.0
    
    def measure_forward(self, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        self.forward_time_ms = (time.perf_counter() - start) * 1000.0
        return result
    
    def measure_inverse(self, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        self.inverse_time_ms = (time.perf_counter() - start) * 1000.0
        return result
