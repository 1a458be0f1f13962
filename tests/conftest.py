from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from PIL import Image

from iconbaker import sources


@pytest.fixture
def make_png(tmp_path: Path) -> Callable[..., Path]:
    """Write an opaque RGBA PNG of the given size and return its path."""

    def _make(name: str = "icon.png", width: int = 64, height: int = 64,
              color: tuple[int, int, int, int] = (15, 98, 254, 255)) -> Path:
        path = tmp_path / name
        Image.new("RGBA", (width, height), color).save(path, format="PNG")
        return path

    return _make


@pytest.fixture
def make_svg(tmp_path: Path) -> Callable[..., Path]:
    if not sources.HAS_CAIROSVG:
        pytest.skip("CairoSVG or the cairo library is not available")

    def _make(name: str = "icon.svg", width: int = 80, height: int = 60) -> Path:
        path = tmp_path / name
        path.write_text(
            (
                f"<svg xmlns=\"http://www.w3.org/2000/svg\" viewBox=\"0 0 {width} {height}\" "
                f"width=\"{width}\" height=\"{height}\">"
                f"<rect x=\"0\" y=\"0\" width=\"{width}\" height=\"{height}\" fill=\"#0f62fe\"/>"
                "</svg>"
            ),
            encoding="utf-8",
        )
        return path

    return _make


@pytest.fixture
def config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config lookup at an isolated, initially absent file."""
    path = tmp_path / "config" / "config.json"
    monkeypatch.setenv("ICONBAKER_CONFIG", str(path))
    return path
