"""DCT kernel pair for block transforms, plus scipy reference transforms."""

import numpy as np
from scipy.fft import dctn, idctn

from engines.transform_engine import SeparableKernel


def alpha(k, n: int):
    """Normalization: sqrt(1/n) for k == 0, sqrt(2/n) otherwise."""
    return np.where(np.asarray(k) == 0, np.sqrt(1.0 / n), np.sqrt(2.0 / n))


def forward_dct_kernel(n: int) -> SeparableKernel:
    """DCT-II basis: (x, y) spatial source, (u, v) frequency destination."""
    def basis(s, k):
        return alpha(k, n) * np.cos((2 * np.asarray(s) + 1) * np.pi * k / (2 * n))

    return SeparableKernel(row_fn=basis, col_fn=basis)


def inverse_dct_kernel(n: int) -> SeparableKernel:
    """DCT-III basis: (x, y) frequency source, (u, v) spatial destination."""
    def basis(k, s):
        return alpha(k, n) * np.cos((np.asarray(s) + 0.5) * np.pi * k / n)

    return SeparableKernel(row_fn=basis, col_fn=basis)


def dct2(block: np.ndarray) -> np.ndarray:
    """2D DCT-II with orthonormal normalization."""
    return dctn(block, type=2, norm='ortho')


def idct2(coeffs: np.ndarray) -> np.ndarray:
    """2D inverse DCT (Type-III)."""
    return idctn(coeffs, type=2, norm='ortho')
