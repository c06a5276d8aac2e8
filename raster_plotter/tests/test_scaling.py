"""Tests for pixel → mm scaling and corner placement."""

from __future__ import annotations

import math

import pytest

from raster_plotter.geometry.errors import DegenerateInputError
from raster_plotter.geometry.primitives import Pixel, Position, Rectangle, Scale
from raster_plotter.geometry.scaling import pixel_to_position, plot_corners, scale


# ---------------------------------------------------------------------------
# scale()
# ---------------------------------------------------------------------------


class TestScale:
    @pytest.mark.parametrize(
        "rect",
        [Rectangle(1.0, 1.0), Rectangle(100.0, 100.0), Rectangle(0.3, 7.1), Rectangle(640.0, 480.0)],
    )
    def test_identical_rectangles_are_identity(self, rect: Rectangle) -> None:
        assert scale(rect, Rectangle(rect.width, rect.height)) == Scale(1.0, 1.0)

    @pytest.mark.parametrize(
        "source, target",
        [
            (Rectangle(100.0, 100.0), Rectangle(50.0, 50.0)),
            (Rectangle(200.0, 100.0), Rectangle(50.0, 50.0)),
            (Rectangle(100.0, 300.0), Rectangle(80.0, 20.0)),
            (Rectangle(3.0, 7.0), Rectangle(11.0, 13.0)),
        ],
    )
    def test_fit_preserves_aspect(self, source: Rectangle, target: Rectangle) -> None:
        result = scale(source, target, force=False)
        assert result.x == result.y
        assert result.x > 0

    def test_fit_uses_smaller_ratio(self) -> None:
        assert scale(Rectangle(200.0, 100.0), Rectangle(50.0, 50.0)) == Scale(0.25, 0.25)
        assert scale(Rectangle(100.0, 200.0), Rectangle(50.0, 50.0)) == Scale(0.25, 0.25)

    def test_fit_image_stays_inside_target(self) -> None:
        source, target = Rectangle(640.0, 480.0), Rectangle(100.0, 100.0)
        result = scale(source, target)
        assert source.width * result.x <= target.width
        assert source.height * result.y <= target.height

    def test_force_uses_independent_ratios(self) -> None:
        source, target = Rectangle(200.0, 100.0), Rectangle(50.0, 50.0)
        result = scale(source, target, force=True)
        assert result.x == target.width / source.width
        assert result.y == target.height / source.height

    def test_force_with_identical_rectangles(self) -> None:
        rect = Rectangle(10.0, 20.0)
        assert scale(rect, rect, force=True) == Scale(1.0, 1.0)

    @pytest.mark.parametrize(
        "source, target",
        [
            (Rectangle(0.0, 100.0), Rectangle(50.0, 50.0)),
            (Rectangle(100.0, 0.0), Rectangle(50.0, 50.0)),
            (Rectangle(100.0, 100.0), Rectangle(0.0, 50.0)),
            (Rectangle(-1.0, 100.0), Rectangle(50.0, 50.0)),
            (Rectangle(100.0, 100.0), Rectangle(50.0, math.inf)),
            (Rectangle(math.nan, 100.0), Rectangle(50.0, 50.0)),
        ],
    )
    def test_degenerate_rectangles_rejected(self, source: Rectangle, target: Rectangle) -> None:
        with pytest.raises(DegenerateInputError):
            scale(source, target)
        with pytest.raises(DegenerateInputError):
            scale(source, target, force=True)

    def test_degenerate_error_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="source width"):
            scale(Rectangle(0.0, 1.0), Rectangle(1.0, 1.0))


# ---------------------------------------------------------------------------
# pixel_to_position() / plot_corners()
# ---------------------------------------------------------------------------


class TestPixelToPosition:
    def test_scale_and_offset(self) -> None:
        pos = pixel_to_position(Pixel(10.0, 20.0), Scale(0.5, 0.25), Position(1.0, 2.0))
        assert pos == Position(6.0, 7.0)

    def test_origin_maps_to_offset(self) -> None:
        offset = Position(12.5, -3.0)
        assert pixel_to_position(Pixel(0.0, 0.0), Scale(3.0, 4.0), offset) == offset

    def test_corners(self) -> None:
        start, end = plot_corners(Rectangle(100.0, 100.0), Scale(0.5, 0.5), Position(0.0, 0.0))
        assert start == Position(0.0, 0.0)
        assert end == Position(50.0, 50.0)

    def test_corners_with_offset(self) -> None:
        start, end = plot_corners(Rectangle(40.0, 20.0), Scale(0.5, 0.5), Position(10.0, 5.0))
        assert start == Position(10.0, 5.0)
        assert end == Position(30.0, 15.0)
