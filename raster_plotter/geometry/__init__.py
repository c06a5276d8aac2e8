"""
Geometry module.

Value types, pixel → mm scaling, plot angle normalization, and the
single-step wall intersection used by the zigzag path generator.

All positions in millimetres.
"""

from raster_plotter.geometry.angles import (
    is_axis_aligned,
    normalize_degrees,
    truncate_degrees,
)
from raster_plotter.geometry.errors import (
    DegenerateAngleError,
    DegenerateInputError,
    NonTerminatingPathError,
    PathGenerationError,
)
from raster_plotter.geometry.intersect import dist_on_angle, point_separation
from raster_plotter.geometry.primitives import (
    Bounds,
    Path,
    Pixel,
    Position,
    Rectangle,
    Scale,
)
from raster_plotter.geometry.scaling import pixel_to_position, plot_corners, scale

__all__ = [
    "Bounds",
    "DegenerateAngleError",
    "DegenerateInputError",
    "NonTerminatingPathError",
    "Path",
    "PathGenerationError",
    "Pixel",
    "Position",
    "Rectangle",
    "Scale",
    "dist_on_angle",
    "is_axis_aligned",
    "normalize_degrees",
    "pixel_to_position",
    "plot_corners",
    "point_separation",
    "scale",
    "truncate_degrees",
]
