"""Container encoders: ICO, ICNS and a zip of PNGs.

All three embed PNG-compressed images. Sizes reaching an encoder have
already been validated, so an ``EncodeError`` here signals a defect.
"""

import io
import struct
import zipfile

from PIL import Image

from iconbaker.errors import EncodeError
from iconbaker.models import ContainerKind, Size

ICNS_TYPES = {
    16: b"icp4",
    32: b"icp5",
    64: b"icp6",
    128: b"ic07",
    256: b"ic08",
    512: b"ic09",
    1024: b"ic10",
}


def png_bytes(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def _check_slot(kind: ContainerKind, size: Size, image: Image.Image) -> None:
    if not kind.accepts(size):
        raise EncodeError(f"{kind.value} cannot hold a {size} image")
    if kind.has_fixed_slots and image.size != tuple(size):
        raise EncodeError(
            f"{kind.value} slot {size} got a {image.width}x{image.height} image"
        )


def encode_ico(images: list[tuple[Size, Image.Image]]) -> bytes:
    # Pillow picks each frame from the supplied images by exact size, so the
    # largest one is the base image and the rest are appended.
    ordered = sorted(images, key=lambda item: item[0].width)
    base = ordered[-1][1]
    buffer = io.BytesIO()
    base.save(
        buffer,
        format="ICO",
        sizes=[tuple(size) for size, _ in ordered],
        append_images=[image for _, image in ordered[:-1]],
    )
    return buffer.getvalue()


def encode_icns(images: list[tuple[Size, Image.Image]]) -> bytes:
    # Built by hand: Pillow's ICNS writer emits every size, not only the bound ones.
    chunks = []
    for size, image in images:
        data = png_bytes(image)
        # Each chunk length counts its own 8-byte type and length header.
        chunks.append(ICNS_TYPES[size.width] + struct.pack(">I", len(data) + 8) + data)

    body = b"".join(chunks)
    return b"icns" + struct.pack(">I", len(body) + 8) + body


def encode_png_sequence(images: list[tuple[Size, Image.Image]]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_STORED) as archive:
        for size, image in images:
            archive.writestr(f"{size}.png", png_bytes(image))
    return buffer.getvalue()


ENCODERS = {
    ContainerKind.ICO: encode_ico,
    ContainerKind.ICNS: encode_icns,
    ContainerKind.PNG_SEQUENCE: encode_png_sequence,
}


def encode(kind: ContainerKind, images: list[tuple[Size, Image.Image]]) -> bytes:
    """Assemble ``images`` into the byte stream of a ``kind`` container."""
    seen = set()
    for size, image in images:
        if size in seen:
            raise EncodeError(f"{kind.value} already holds a {size} image")
        seen.add(size)
        _check_slot(kind, size, image)
    return ENCODERS[kind](images)
