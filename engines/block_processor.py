"""Block processing: splitting an image into tiles and merging them back."""

import logging
from typing import List, Tuple

from engines.geometry import paste, sub_image
from models.errors import BoundsError, ChannelMismatchError, PreconditionError
from models.image import Image

logger = logging.getLogger(__name__)

TileGrid = List[List[Image]]


def _block_extent(index: int, block: int, total: int) -> int:
    """Size of the index-th block along an axis; the last one takes the remainder."""
    if (index + 1) * block <= total:
        return block
    return total % block


def split_into_blocks(image: Image, block_width: int, block_height: int) -> TileGrid:
    """
    Split image into a row-major grid of sub-images.

    The grid has ceil(height / block_height) rows and ceil(width / block_width)
    columns. Edge tiles are smaller when the size does not divide evenly.
    """
    if block_width <= 0 or block_height <= 0:
        raise ValueError(f"Block size must be positive, got {block_width}x{block_height}")
    if image.area == 0:
        raise PreconditionError(f"Cannot split an empty {image.width}x{image.height} image")

    rows = (image.height - 1) // block_height + 1
    cols = (image.width - 1) // block_width + 1

    grid: TileGrid = []
    y = 0
    for i in range(rows):
        tile_h = _block_extent(i, block_height, image.height)
        row = []
        x = 0
        for j in range(cols):
            tile_w = _block_extent(j, block_width, image.width)
            row.append(sub_image(image, x, y, tile_w, tile_h))
            x += tile_w
        grid.append(row)
        y += tile_h

    logger.debug("Split %r into %dx%d blocks", image, rows, cols)
    return grid


def _check_grid(grid: TileGrid) -> None:
    if not grid or not grid[0]:
        raise BoundsError(0, 0, 0, 0)

    reference = grid[0][0]
    cols = len(grid[0])
    for i, row in enumerate(grid):
        if len(row) != cols:
            raise ChannelMismatchError(f"Row {i} has {len(row)} tiles, expected {cols}")
        for j, tile in enumerate(row):
            if tile.tags != reference.tags or tile.dtype != reference.dtype:
                raise ChannelMismatchError(
                    f"Tile ({i}, {j}) has channels {[t.name for t in tile.tags]} / {tile.dtype}, "
                    f"expected {[t.name for t in reference.tags]} / {reference.dtype}"
                )
            if tile.height != row[0].height:
                raise ChannelMismatchError(
                    f"Tile ({i}, {j}) height {tile.height} differs from row height {row[0].height}"
                )
            if tile.width != grid[0][j].width:
                raise ChannelMismatchError(
                    f"Tile ({i}, {j}) width {tile.width} differs from column width {grid[0][j].width}"
                )


def tile_offsets(grid: TileGrid) -> List[List[Tuple[int, int]]]:
    """(x, y) origin of every tile in the merged image."""
    offsets = []
    y = 0
    for row in grid:
        x = 0
        row_offsets = []
        for tile in row:
            row_offsets.append((x, y))
            x += tile.width
        offsets.append(row_offsets)
        y += row[0].height
    return offsets


def merge_blocks(grid: TileGrid) -> Image:
    """Merge a tile grid back into one image (inverse of split_into_blocks)."""
    _check_grid(grid)

    width = sum(tile.width for tile in grid[0])
    height = sum(row[0].height for row in grid)
    merged = Image.like(grid[0][0], width, height)

    for row, row_offsets in zip(grid, tile_offsets(grid)):
        for tile, (x, y) in zip(row, row_offsets):
            paste(merged, x, y, tile)
    return merged
