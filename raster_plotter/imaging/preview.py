"""Path preview rendering.

Draws a generated path as connected segments on a white canvas so a plot
can be checked before it reaches the device.

The canvas spans from the first point of the path (the start corner) to
the last one (the end corner).  Path coordinates are y-up; image rows are
y-down, so rows are flipped when rasterizing.  The stroke colour's alpha
is blended over the white background.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Sequence

import numpy as np
from PIL import Image, ImageDraw

from raster_plotter.configs.loader import PreviewConfig
from raster_plotter.geometry.primitives import Position
from raster_plotter.utils.fs import atomic_save_image

logger = logging.getLogger(__name__)

MM_PER_INCH = 25.4


def render_path_preview(
    path: Sequence[Position],
    dpi: float = 500.0,
    stroke_width_mm: float = 0.1,
    stroke_rgba: tuple[int, int, int, int] = (64, 64, 64, 128),
) -> np.ndarray:
    """Rasterize *path* into an RGB image.

    Parameters
    ----------
    path : Sequence[Position]
        Generated path, at least 2 points, last point up and to the right
        of the first.
    dpi : float
        Output resolution in dots per inch.
    stroke_width_mm : float
        Segment width in mm (at least one pixel is drawn).
    stroke_rgba : tuple[int, int, int, int]
        Stroke colour and opacity.

    Returns
    -------
    np.ndarray
        Shape (H, W, 3), dtype uint8.

    Raises
    ------
    ValueError
        If the path has fewer than 2 points or spans no area.
    """
    if len(path) < 2:
        raise ValueError(f"Preview needs at least 2 points, got {len(path)}")

    origin, corner = path[0], path[-1]
    width_mm = corner.x - origin.x
    height_mm = corner.y - origin.y
    if width_mm <= 0 or height_mm <= 0:
        raise ValueError(
            f"Preview area from {origin} to {corner} has no area"
        )

    px_per_mm = dpi / MM_PER_INCH
    width_px = max(1, math.ceil(width_mm * px_per_mm))
    height_px = max(1, math.ceil(height_mm * px_per_mm))
    line_px = max(1, round(stroke_width_mm * px_per_mm))

    points = [
        ((pt.x - origin.x) * px_per_mm, (corner.y - pt.y) * px_per_mm)
        for pt in path
    ]

    overlay = Image.new("RGBA", (width_px, height_px), (255, 255, 255, 0))
    ImageDraw.Draw(overlay).line(points, fill=tuple(stroke_rgba), width=line_px)

    canvas = Image.new("RGBA", (width_px, height_px), (255, 255, 255, 255))
    rgb = Image.alpha_composite(canvas, overlay).convert("RGB")

    logger.debug(
        "Rendered preview %dx%d px (%.1f x %.1f mm @ %.0f dpi)",
        width_px, height_px, width_mm, height_mm, dpi,
    )
    return np.asarray(rgb)


def save_path_preview(
    path: Sequence[Position],
    out: str | Path,
    config: PreviewConfig | None = None,
) -> Path:
    """Render *path* with *config* settings and save it atomically as *out*."""
    config = config or PreviewConfig()
    img = render_path_preview(
        path,
        dpi=config.dpi,
        stroke_width_mm=config.stroke_width_mm,
        stroke_rgba=config.stroke_rgba,
    )
    written = atomic_save_image(
        img, out, pil_kwargs={"dpi": (config.dpi, config.dpi)}
    )
    logger.info("Saved path preview to %s", written)
    return written
