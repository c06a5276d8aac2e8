"""Raster Plotter: zigzag fill paths for pen/plotter output.

Converts the bounding rectangle of a raster image into a single continuous
boustrophedon path covering a target area (millimetres) at a configurable
angle.

Subpackages:
    geometry: Value types, scaling, angle normalization, wall intersection
    path: Zigzag path generator (wall-bouncing state machine)
    configs: Plot configuration loading and validation
    imaging: Source image decoding and path preview rendering
    utils: Filesystem helpers and unified logging
    scripts: Command-line entrypoints

Layering (strict one-way dependency):
    scripts/ → imaging/, path/ → configs/, geometry/ → utils/

All geometry in millimetres, y axis up, origin at the configured start
offset.
"""

__version__ = "0.3.0"

__all__ = ["geometry", "path", "configs", "imaging", "utils", "scripts"]
