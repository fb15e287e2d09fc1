"""
Generic 2D linear transform driven by a kernel function.

For every channel and destination pixel (u, v):

    out[v][u] = sum over (x, y) of kernel(x, y, u, v) * in[y][x]

The kernel is treated as a black box, so any 2D weighting works. Kernels
wrapped in SeparableKernel take a two-pass path that gives the same result.
"""

import logging
import numbers
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Dict, Optional, Tuple, Union

import numpy as np

from engines.block_processor import merge_blocks, split_into_blocks
from models.image import Image

logger = logging.getLogger(__name__)

Kernel = Callable[[float, float, float, float], float]
Operator = Callable[[np.ndarray], np.ndarray]


class SeparableKernel:
    """
    Kernel of the form col_fn(y, v) * row_fn(x, u).

    Still callable with the four-argument kernel signature, so it works
    anywhere a plain kernel does.
    """

    def __init__(self, row_fn: Callable, col_fn: Callable):
        self.row_fn = row_fn
        self.col_fn = col_fn

    def __call__(self, x, y, u, v):
        return self.col_fn(y, v) * self.row_fn(x, u)

    def row_matrix(self, width: int) -> np.ndarray:
        """B[u, x] = row_fn(x, u)."""
        return _basis_matrix(self.row_fn, width)

    def column_matrix(self, height: int) -> np.ndarray:
        """A[v, y] = col_fn(y, v)."""
        return _basis_matrix(self.col_fn, height)


def _basis_matrix(fn: Callable, size: int) -> np.ndarray:
    matrix = np.empty((size, size), dtype=np.float64)
    for dest in range(size):
        for src in range(size):
            matrix[dest, src] = fn(src, dest)
    return matrix


def _weight_rows(kernel: Kernel, width: int, height: int, dest: np.ndarray, vectorized: bool) -> np.ndarray:
    """Rows W[d, y*w + x] = kernel(x, y, u, v) for flat destination indices d = v*w + u."""
    n = width * height
    if n == 0:
        return np.empty((len(dest), 0), dtype=np.float64)
    if vectorized:
        y, x = np.indices((height, width))
        dv, du = np.divmod(dest, width)
        weights = kernel(x, y, du[:, np.newaxis, np.newaxis], dv[:, np.newaxis, np.newaxis])
        weights = np.broadcast_to(np.asarray(weights, dtype=np.float64), (len(dest), height, width))
        return weights.reshape(len(dest), n)

    rows = np.empty((len(dest), n), dtype=np.float64)
    for i, d in enumerate(dest):
        v, u = divmod(int(d), width)
        row = rows[i]
        for y in range(height):
            for x in range(width):
                row[y * width + x] = kernel(x, y, u, v)
    return rows


def build_weight_matrix(kernel: Kernel, width: int, height: int, vectorized: bool = False) -> np.ndarray:
    """
    Dense (h*w, h*w) matrix with W[v*w + u, y*w + x] = kernel(x, y, u, v).

    With vectorized=True the kernel is called once with broadcast index
    arrays instead of once per (x, y, u, v).
    """
    return _weight_rows(kernel, width, height, np.arange(width * height), vectorized)


MAX_WEIGHT_ELEMENTS = 1 << 20


def make_operator(
    kernel: Kernel,
    width: int,
    height: int,
    vectorized: bool = False,
    separable: bool = True
) -> Operator:
    """
    Linear map for one grid size, applied to a (channels, height, width) stack.

    Small grids get the full weight matrix built once. Larger grids evaluate
    the kernel in chunks of destination pixels, holding at most
    MAX_WEIGHT_ELEMENTS weights at a time.
    """
    if separable and isinstance(kernel, SeparableKernel):
        col = kernel.column_matrix(height)
        row_t = kernel.row_matrix(width).T

        def apply_separable(stack: np.ndarray) -> np.ndarray:
            return col @ stack @ row_t

        return apply_separable

    n = width * height
    if n * n <= MAX_WEIGHT_ELEMENTS:
        weights = build_weight_matrix(kernel, width, height, vectorized)

        def apply_dense(stack: np.ndarray) -> np.ndarray:
            return (stack.reshape(len(stack), n) @ weights.T).reshape(stack.shape)

        return apply_dense

    chunk = max(1, MAX_WEIGHT_ELEMENTS // n)

    def apply_chunked(stack: np.ndarray) -> np.ndarray:
        flat = stack.reshape(len(stack), n)
        out = np.empty_like(flat)
        for start in range(0, n, chunk):
            dest = np.arange(start, min(start + chunk, n))
            out[:, dest] = flat @ _weight_rows(kernel, width, height, dest, vectorized).T
        return out.reshape(stack.shape)

    return apply_chunked


def _output_dtype(dtype: np.dtype) -> np.dtype:
    if np.issubdtype(dtype, np.floating):
        return dtype
    return np.dtype(np.float64)


def apply_operator(image: Image, operator: Operator) -> Image:
    """Run operator over all channels of image, returning a new floating image."""
    result = Image.like(image, image.width, image.height, dtype=_output_dtype(image.dtype))
    if len(image) == 0:
        return result
    stack = np.stack([channel.samples.astype(np.float64) for channel in image])
    for channel, samples in zip(result, operator(stack)):
        channel.samples[:] = samples
    return result


def transform(image: Image, kernel: Kernel, vectorized: bool = False, separable: bool = True) -> Image:
    """Apply kernel over the whole image, channel by channel."""
    operator = make_operator(kernel, image.width, image.height, vectorized, separable)
    return apply_operator(image, operator)


def _normalize_tile_size(tile_size: Union[int, Tuple[int, int]]) -> Tuple[int, int]:
    if isinstance(tile_size, numbers.Integral):
        return int(tile_size), int(tile_size)
    width, height = tile_size
    return int(width), int(height)


def transform_tiled(
    image: Image,
    kernel: Kernel,
    tile_size: Union[int, Tuple[int, int]],
    max_workers: Optional[int] = None,
    vectorized: bool = False,
    separable: bool = True
) -> Image:
    """
    Split image into tile_size (width, height) blocks, transform each block
    in its own local coordinates, and merge the results.

    Blocks are independent tasks on a thread pool. Operators are built once
    per distinct block shape before any task starts. With separable=False a
    SeparableKernel is evaluated through the dense weight matrix.
    """
    tile_width, tile_height = _normalize_tile_size(tile_size)
    grid = split_into_blocks(image, tile_width, tile_height)

    operators: Dict[Tuple[int, int], Operator] = {}
    for row in grid:
        for tile in row:
            key = (tile.width, tile.height)
            if key not in operators:
                operators[key] = make_operator(
                    kernel, tile.width, tile.height, vectorized, separable
                )

    transformed = [[None] * len(row) for row in grid]
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_idx = {
            executor.submit(apply_operator, tile, operators[(tile.width, tile.height)]): (i, j)
            for i, row in enumerate(grid)
            for j, tile in enumerate(row)
        }
        for future in as_completed(future_to_idx):
            i, j = future_to_idx[future]
            transformed[i][j] = future.result()

    logger.debug(
        "Transformed %d blocks of %dx%d (%d operator shapes)",
        len(future_to_idx), tile_width, tile_height, len(operators)
    )
    return merge_blocks(transformed)
