"""Tests for source image decoding and path previews."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from raster_plotter.configs.loader import PreviewConfig
from raster_plotter.geometry.primitives import Position, Rectangle
from raster_plotter.imaging.preview import render_path_preview, save_path_preview
from raster_plotter.imaging.source import load_source_image
from raster_plotter.path.zigzag import ZigzagPathGenerator


@pytest.fixture()
def small_path():
    generator = ZigzagPathGenerator(
        Position(0.0, 0.0), Position(4.0, 2.0), angle_deg=45.0, line_separation=0.4, step=0.5
    )
    return generator.run()


# ---------------------------------------------------------------------------
# Source images
# ---------------------------------------------------------------------------


class TestLoadSourceImage:
    def test_extents_and_luminance(self, make_png) -> None:
        image = load_source_image(make_png(40, 25, value=255))
        assert image.size == Rectangle(40.0, 25.0)
        assert image.luminance.shape == (25, 40)
        assert image.luminance.dtype == np.float32
        assert image.luminance_at(0, 0) == pytest.approx(1.0)

    def test_black_image(self, make_png) -> None:
        image = load_source_image(make_png(3, 3, value=0))
        assert float(image.luminance.max()) == 0.0

    def test_grayscale_input(self, tmp_path: Path) -> None:
        path = tmp_path / "gray.png"
        Image.fromarray(np.full((5, 7), 128, dtype=np.uint8)).save(path)
        image = load_source_image(path)
        assert image.size == Rectangle(7.0, 5.0)
        assert image.luminance_at(6, 4) == pytest.approx(128 / 255)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_source_image(tmp_path / "missing.png")

    def test_garbage_bytes(self, tmp_path: Path) -> None:
        path = tmp_path / "garbage.png"
        path.write_bytes(b"not an image at all")
        with pytest.raises(ValueError, match="Cannot decode"):
            load_source_image(path)


# ---------------------------------------------------------------------------
# Previews
# ---------------------------------------------------------------------------


class TestRenderPreview:
    def test_canvas_size_from_dpi(self, small_path) -> None:
        img = render_path_preview(small_path, dpi=254.0)
        assert img.shape == (20, 40, 3)
        assert img.dtype == np.uint8

    def test_path_darkens_canvas(self, small_path) -> None:
        img = render_path_preview(small_path, dpi=254.0, stroke_width_mm=0.2)
        assert img.min() < 255
        assert img.max() == 255

    def test_opaque_stroke_colour(self) -> None:
        path = [Position(0.0, 0.0), Position(0.0, 1.0), Position(1.0, 1.0)]
        img = render_path_preview(path, dpi=254.0, stroke_width_mm=0.1, stroke_rgba=(0, 0, 0, 255))
        assert tuple(img[0, 5]) == (0, 0, 0)

    def test_too_few_points(self) -> None:
        with pytest.raises(ValueError, match="at least 2"):
            render_path_preview([Position(0.0, 0.0)])

    def test_no_area(self) -> None:
        with pytest.raises(ValueError, match="no area"):
            render_path_preview([Position(0.0, 0.0), Position(3.0, 0.0)])


class TestSavePreview:
    def test_writes_png(self, small_path, tmp_path: Path) -> None:
        out = tmp_path / "nested" / "path.png"
        written = save_path_preview(small_path, out, PreviewConfig(dpi=127.0))
        assert written == out
        assert out.exists()
        assert not list(out.parent.glob("*.tmp*"))
        with Image.open(out) as img:
            assert img.size == (20, 10)
            assert img.mode == "RGB"

    def test_default_config(self, small_path, tmp_path: Path) -> None:
        out = save_path_preview(small_path, tmp_path / "default.png")
        with Image.open(out) as img:
            assert img.size == (79, 40)

    def test_unwritable_target(self, small_path, tmp_path: Path) -> None:
        out = tmp_path / "preview.unknownext"
        with pytest.raises(RuntimeError):
            save_path_preview(small_path, out, PreviewConfig(dpi=50.0))
        assert not list(tmp_path.glob("*.tmp*"))
