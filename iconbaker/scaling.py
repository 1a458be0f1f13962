"""Scaling engine: produce the pixel buffer for one binding."""

import logging

from PIL import Image

from iconbaker.errors import IllegalDownsizeWithoutInterpolation, SizeNotRenderable
from iconbaker.models import Entry, FitPolicy, ResamplePolicy, Size
from iconbaker.sources import Source

logger = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)

# What Pillow raises when a buffer cannot be allocated at the requested size.
RENDER_FAILURES = (OverflowError, MemoryError, ValueError, Image.DecompressionBombError)


def fit_within(source: Size, box: Size) -> Size:
    """Largest size with the aspect ratio of ``source`` that fits in ``box``."""
    ratio = min(box.width / source.width, box.height / source.height)
    width = max(1, min(box.width, round(source.width * ratio)))
    height = max(1, min(box.height, round(source.height * ratio)))
    return Size(width, height)


def check_downsizing(entry: Entry, source: Source) -> None:
    """Nearest-neighbour shrinking of a bitmap is refused."""
    if source.is_vector or entry.resample is not ResamplePolicy.NEAREST:
        return
    native = source.size
    if entry.size.width < native.width or entry.size.height < native.height:
        raise IllegalDownsizeWithoutInterpolation(entry.size, native, entry.source)


def center_on_canvas(image: Image.Image, size: Size) -> Image.Image:
    """Paste ``image`` centered on a transparent canvas of exactly ``size``."""
    if image.size == tuple(size):
        return image
    canvas = Image.new("RGBA", tuple(size), TRANSPARENT)
    dx = (size.width - image.width) // 2
    dy = (size.height - image.height) // 2
    canvas.paste(image, (dx, dy))
    return canvas


def scale(entry: Entry, source: Source) -> Image.Image:
    """Render ``source`` for ``entry``.

    The image is scaled, aspect preserved, to fit the requested box. Under
    exact fit it is then centered on a transparent canvas of the requested
    size; under proportional fit it is returned as is.
    """
    check_downsizing(entry, source)

    target = fit_within(source.size, entry.size)
    try:
        image = source.render(target.width, target.height, entry.resample)
        if entry.fit is FitPolicy.EXACT:
            image = center_on_canvas(image, entry.size)
    except RENDER_FAILURES as e:
        raise SizeNotRenderable(entry.size, entry.source, entry.position,
                                str(e) or type(e).__name__) from e

    logger.debug("Scaled %s to %dx%d for slot %s", entry.source,
                 image.width, image.height, entry.size)
    return image
