"""Plan assembler: scale every binding and hand the images to the encoder."""

import logging
from typing import Callable

from PIL import Image

from iconbaker.encoders import encode as encode_container
from iconbaker.models import ContainerKind, IconCommand, Size
from iconbaker.scaling import scale
from iconbaker.sources import SourceCache

logger = logging.getLogger(__name__)

Encoder = Callable[[ContainerKind, list[tuple[Size, Image.Image]]], bytes]


def render_plan(command: IconCommand,
                sources: SourceCache) -> list[tuple[Size, Image.Image]]:
    """Scale each binding, in plan order."""
    images = []
    for size, entry in command.plan.items():
        images.append((size, scale(entry, sources.get(entry.source))))
    return images


def assemble(command: IconCommand, sources: SourceCache | None = None,
             encode: Encoder = encode_container) -> bytes:
    """Build the container bytes for ``command``.

    Sources are decoded through ``sources`` (a fresh cache when omitted);
    failures from scaling or the encoder propagate unchanged.
    """
    if sources is None:
        sources = SourceCache()
    images = render_plan(command, sources)
    logger.info("Encoding %d image(s) from %d source(s) as %s",
                len(images), len(sources), command.kind.value)
    return encode(command.kind, images)
