"""Source decoding: raster files through Pillow, SVG files through CairoSVG."""

import io
import logging
from pathlib import Path
from typing import Callable

from PIL import Image, UnidentifiedImageError

from iconbaker.errors import SourceNotFound, SourceUnreadable
from iconbaker.models import ResamplePolicy, Size

logger = logging.getLogger(__name__)

try:
    import cairosvg
    HAS_CAIROSVG = True
except (ImportError, OSError):
    # OSError: the package is installed but the native cairo library is not.
    HAS_CAIROSVG = False

VECTOR_EXTENSIONS = {".svg", ".svgz"}

RESAMPLE_FILTERS = {
    ResamplePolicy.NEAREST: Image.Resampling.NEAREST,
    ResamplePolicy.LINEAR: Image.Resampling.BILINEAR,
    ResamplePolicy.CUBIC: Image.Resampling.BICUBIC,
}


class RasterSource:
    """A decoded bitmap held in RGBA."""

    is_vector = False

    def __init__(self, path: Path, image: Image.Image):
        self.path = path
        self.image = image.convert("RGBA")

    @property
    def size(self) -> Size:
        return Size(*self.image.size)

    def render(self, width: int, height: int,
               resample: ResamplePolicy = ResamplePolicy.NEAREST) -> Image.Image:
        if (width, height) == self.image.size:
            return self.image.copy()
        return self.image.resize((width, height), RESAMPLE_FILTERS[resample])


class VectorSource:
    """An SVG document, rasterized on demand at the requested resolution."""

    is_vector = True

    def __init__(self, path: Path, data: bytes):
        self.path = path
        self.data = data
        # Rendering at the document's own size both validates it and yields
        # the native dimensions.
        native = self._rasterize()
        self._size = Size(*native.size)

    @property
    def size(self) -> Size:
        return self._size

    def render(self, width: int, height: int,
               resample: ResamplePolicy = ResamplePolicy.NEAREST) -> Image.Image:
        # Vectors are rasterized directly, so the kernel does not apply.
        return self._rasterize(width, height)

    def _rasterize(self, width: int | None = None,
                   height: int | None = None) -> Image.Image:
        try:
            png = cairosvg.svg2png(bytestring=self.data,
                                   output_width=width, output_height=height)
            image = Image.open(io.BytesIO(png))
            image.load()
        except Exception as e:
            raise SourceUnreadable(self.path, f"could not rasterize SVG ({e})") from e
        return image.convert("RGBA")


Source = RasterSource | VectorSource


def is_vector_path(path: Path) -> bool:
    return path.suffix.lower() in VECTOR_EXTENSIONS


def decode_source(path: Path) -> Source:
    """Decode ``path`` into a source image, or raise a SourceError."""
    path = Path(path)
    if not path.is_file():
        raise SourceNotFound(path)

    if is_vector_path(path):
        if not HAS_CAIROSVG:
            raise SourceUnreadable(path, "SVG support needs CairoSVG and the cairo library")
        try:
            data = path.read_bytes()
        except OSError as e:
            raise SourceUnreadable(path, e.strerror or str(e)) from e
        source = VectorSource(path, data)
    else:
        try:
            with Image.open(path) as image:
                image.load()
                source = RasterSource(path, image)
        except UnidentifiedImageError as e:
            raise SourceUnreadable(path, "unrecognized image format") from e
        except Image.DecompressionBombError as e:
            raise SourceUnreadable(path, str(e)) from e
        except OSError as e:
            raise SourceUnreadable(path, e.strerror or str(e)) from e

    logger.info("Decoded %s (%dx%d%s)", path, source.size.width,
                source.size.height, ", vector" if source.is_vector else "")
    return source


class SourceCache:
    """Decodes each distinct source once per invocation.

    Keys are canonical paths, so ``a.png`` and ``./a.png`` share one decode.
    Entries are never replaced once inserted.
    """

    def __init__(self, decode: Callable[[Path], Source] = decode_source):
        self._decode = decode
        self._sources: dict[Path, Source] = {}

    @staticmethod
    def _key(path: Path) -> Path:
        return Path(path).resolve()

    def get(self, path: Path) -> Source:
        key = self._key(path)
        source = self._sources.get(key)
        if source is None:
            source = self._decode(Path(path))
            self._sources[key] = source
        return source

    def __contains__(self, path) -> bool:
        return self._key(path) in self._sources

    def __len__(self) -> int:
        return len(self._sources)
