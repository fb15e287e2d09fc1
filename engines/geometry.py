"""Region extraction, pasting and resizing between images."""

from models.errors import BoundsError, ChannelMismatchError
from models.image import Image


def check_window(image: Image, x: int, y: int, width: int, height: int) -> None:
    """Raise BoundsError unless the window lies fully inside the image."""
    if (x < 0 or y < 0 or width < 0 or height < 0
            or x + width > image.width or y + height > image.height):
        raise BoundsError(x, y, width, height, limits=(image.width, image.height))


def sub_image(image: Image, x: int, y: int, width: int, height: int) -> Image:
    """Copy the width x height window at (x, y) into a new image."""
    check_window(image, x, y, width, height)
    result = Image.like(image, width, height)
    for channel in image:
        result[channel.tag].samples[:] = channel.samples[y:y + height, x:x + width]
    return result


def paste(target: Image, x: int, y: int, source: Image) -> None:
    """
    Write source into target at (x, y), in place.

    Pixels falling outside target are dropped. Only tags present in both
    images are written; source-only tags are ignored. Both images must
    share a sample dtype.
    """
    if source.dtype != target.dtype:
        raise ChannelMismatchError(f"Cannot paste {source.dtype} samples into a {target.dtype} image")

    # Clip the source window against target bounds
    src_x0 = max(0, -x)
    src_y0 = max(0, -y)
    src_x1 = min(source.width, target.width - x)
    src_y1 = min(source.height, target.height - y)
    if src_x1 <= src_x0 or src_y1 <= src_y0:
        return

    for channel in source:
        dest = target.get(channel.tag)
        if dest is None:
            continue
        dest.samples[y + src_y0:y + src_y1, x + src_x0:x + src_x1] = \
            channel.samples[src_y0:src_y1, src_x0:src_x1]


def copy_resized(image: Image, width: int, height: int) -> Image:
    """New width x height image holding the overlap with the source; the rest stays zero."""
    result = Image.like(image, width, height)
    rows = min(image.height, height)
    cols = min(image.width, width)
    for channel in image:
        result[channel.tag].samples[:rows, :cols] = channel.samples[:rows, :cols]
    return result
