"""
Path generation module.

Turns a plot rectangle into the ordered zigzag point sequence consumed by
the preview renderer and the device-output stage.
"""

from raster_plotter.path.zigzag import (
    ZigzagPathGenerator,
    path_length,
    plot_angle,
    plot_path,
    wall_jog,
)

__all__ = [
    "ZigzagPathGenerator",
    "path_length",
    "plot_angle",
    "plot_path",
    "wall_jog",
]
