"""Pixel-space to physical-space scaling.

Maps the source image's pixel extents onto the target rectangle in mm.
Two modes:
    - fit (default): one uniform ratio, the smaller of the two axis ratios,
      so the image fits inside the target with its aspect ratio preserved
    - force: independent per-axis ratios filling the target exactly

Scale and offset are always passed explicitly; nothing here holds state.
"""

from __future__ import annotations

import logging
import math

from raster_plotter.geometry.errors import DegenerateInputError
from raster_plotter.geometry.primitives import Pixel, Position, Rectangle, Scale

logger = logging.getLogger(__name__)


def _check_extent(label: str, rect: Rectangle) -> None:
    for name, value in (("width", rect.width), ("height", rect.height)):
        if not math.isfinite(value) or value <= 0:
            raise DegenerateInputError(
                f"{label} {name} must be finite and > 0, got {value}"
            )


def scale(source: Rectangle, target: Rectangle, force: bool = False) -> Scale:
    """Compute the pixel → mm scale for *source* drawn into *target*.

    Parameters
    ----------
    source : Rectangle
        Source extents in pixels.
    target : Rectangle
        Target extents in mm.
    force : bool
        Use independent per-axis ratios instead of fitting.

    Returns
    -------
    Scale
        Both components strictly positive.  Identical rectangles give
        exactly ``(1, 1)``.

    Raises
    ------
    DegenerateInputError
        If either rectangle has a zero, negative, or non-finite extent.
    """
    _check_extent("source", source)
    _check_extent("target", target)

    width_ratio = target.width / source.width
    height_ratio = target.height / source.height

    if force:
        result = Scale(width_ratio, height_ratio)
    elif source == target:
        result = Scale(1.0, 1.0)
    else:
        ratio = min(width_ratio, height_ratio)
        result = Scale(ratio, ratio)

    logger.debug(
        "Scale %sx%s px -> %sx%s mm (force=%s): (%.6g, %.6g)",
        source.width, source.height, target.width, target.height,
        force, result.x, result.y,
    )
    return result


def pixel_to_position(pixel: Pixel, ratio: Scale, offset: Position) -> Position:
    """Physical position of *pixel*: ``offset + pixel * ratio`` per axis."""
    return Position(
        offset.x + pixel.x * ratio.x,
        offset.y + pixel.y * ratio.y,
    )


def plot_corners(
    source: Rectangle, ratio: Scale, offset: Position
) -> tuple[Position, Position]:
    """Start and end corners of the plot area.

    The start is pixel ``(0, 0)``; the end is the pixel at the source's
    far corner ``(width, height)``.
    """
    start = pixel_to_position(Pixel(0.0, 0.0), ratio, offset)
    end = pixel_to_position(Pixel(source.width, source.height), ratio, offset)
    return start, end
