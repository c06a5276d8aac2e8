"""Zigzag (boustrophedon) path generation.

Builds one continuous path that fills the plot rectangle with parallel
lines at the plot angle.  Travel runs along the angle until it strikes a
wall, jogs a short distance along that wall, reverses, and repeats:

    start (pixel 0,0)                         end (far corner)
        │  jog up left wall                        ▲
        │  travel forward to bottom wall           │
        │  jog right along bottom wall             │
        │  travel back to left or top wall         │
        └── ... lines sweep toward the far corner ─┘

State per run:
    position, on_wall, direction -- owned by the iterator
    bounds, angle, step, gaps    -- fixed when the generator is built

Wall jogs are ``line_separation / cos(a)`` along x and
``line_separation / sin(a)`` along y, so consecutive lines sit exactly
``line_separation`` apart.  A jog that would overshoot the far wall snaps
onto it, which is how the path lands exactly on the end corner.

Angle policy (whole degrees after truncation):
    - multiples of 90°: rejected, the jog lengths are singular
    - (0°, 90°): used as given
    - (180°, 270°): the same family of lines as the angle minus 180°,
      folded onto it
    - (90°, 180°), (270°, 360°): lines slope away from the end corner
      and can never reach it; rejected
"""

from __future__ import annotations

import logging
import math
from typing import Iterator

from raster_plotter.configs.loader import PlotConfig
from raster_plotter.geometry.angles import is_axis_aligned, truncate_degrees
from raster_plotter.geometry.errors import (
    DegenerateAngleError,
    DegenerateInputError,
    NonTerminatingPathError,
)
from raster_plotter.geometry.intersect import dist_on_angle, point_separation
from raster_plotter.geometry.primitives import (
    Bounds,
    Path,
    Position,
    Rectangle,
    Scale,
)
from raster_plotter.geometry.scaling import plot_corners, scale

logger = logging.getLogger(__name__)


def plot_angle(deg: float) -> float:
    """Radians actually traversed for a configured angle in degrees.

    Raises
    ------
    DegenerateAngleError
        For multiples of 90° and for angles whose lines slope away from
        the end corner.
    """
    whole = truncate_degrees(deg)
    if 180 < whole < 270:
        whole -= 180
    rad = (math.pi / 180.0) * whole
    if is_axis_aligned(rad):
        raise DegenerateAngleError(
            f"Plot angle {deg}° is axis-aligned; wall jogs of "
            "separation/cos and separation/sin are singular"
        )
    if not 0 < whole < 90:
        raise DegenerateAngleError(
            f"Plot angle {deg}° traces lines sloping away from the end "
            "corner; use an angle in (0°, 90°) or (180°, 270°)"
        )
    return rad


def wall_jog(coord: float, far_wall: float, gap: float) -> float:
    """Coordinate after one jog along a wall, snapped onto *far_wall*.

    The jog never exceeds *gap*; when the remaining room is at most *gap*
    the result is exactly *far_wall*.
    """
    if far_wall - coord <= gap:
        return far_wall
    return coord + gap


def path_length(path: Path) -> float:
    """Total travel of a path in mm."""
    return sum(point_separation(a, b) for a, b in zip(path, path[1:]))


class ZigzagPathGenerator:
    """Wall-bouncing state machine producing the zigzag path.

    Iterating yields positions lazily; every ``iter()`` restarts the run
    from the start corner.  :meth:`run` collects a complete path.

    Parameters
    ----------
    start, end : Position
        Opposite corners of the plot rectangle; *end* must lie strictly
        above and to the right of *start*.
    angle_deg : float
        Plot angle in degrees (see the module docstring for the policy).
    line_separation : float
        Perpendicular spacing between traversal lines (mm).
    step : float
        Maximum straight-line step before re-checking the walls (mm).
    start_direction : bool
        Initial travel direction flag; the first wall jog flips it.
    end_tolerance : float
        Per-axis distance at which *end* counts as reached (mm).
    max_steps : int
        Cap on emitted points before giving up.

    Raises
    ------
    DegenerateInputError
        For an empty rectangle or non-positive separation/step.
    DegenerateAngleError
        For a rejected plot angle.
    """

    def __init__(
        self,
        start: Position,
        end: Position,
        *,
        angle_deg: float,
        line_separation: float,
        step: float,
        start_direction: bool = False,
        end_tolerance: float = 1e-9,
        max_steps: int = 5_000_000,
    ) -> None:
        if not (end.x > start.x and end.y > start.y):
            raise DegenerateInputError(
                f"Plot rectangle from {start} to {end} has no area"
            )
        for name, value in (("line_separation", line_separation), ("step", step)):
            if not math.isfinite(value) or value <= 0:
                raise DegenerateInputError(f"{name} must be finite and > 0, got {value}")
        if max_steps < 1:
            raise ValueError(f"max_steps must be >= 1, got {max_steps}")

        self.start = start
        self.end = end
        self.bounds = Bounds.from_corners(start, end)
        self.angle = plot_angle(angle_deg)
        self.step = step
        self.gap_x = line_separation / math.cos(self.angle)
        self.gap_y = line_separation / math.sin(self.angle)
        self.start_direction = start_direction
        self.end_tolerance = end_tolerance
        self.max_steps = max_steps

    @classmethod
    def from_config(
        cls, source: Rectangle, config: PlotConfig
    ) -> tuple[ZigzagPathGenerator, Scale]:
        """Generator for *source* pixel extents drawn per *config*.

        Returns the generator together with the pixel → mm scale used.
        """
        ratio = scale(source, config.target, config.force_dimensions)
        start, end = plot_corners(source, ratio, config.offset)
        generator = cls(
            start,
            end,
            angle_deg=config.plot_angle_deg,
            line_separation=config.line_separation_mm,
            step=config.plot_density_mm,
            start_direction=config.start_direction,
            end_tolerance=config.termination.end_tolerance_mm,
            max_steps=config.termination.max_steps,
        )
        return generator, ratio

    def _reached_end(self, pt: Position) -> bool:
        tol = self.end_tolerance
        return abs(pt.x - self.end.x) <= tol and abs(pt.y - self.end.y) <= tol

    def __iter__(self) -> Iterator[Position]:
        bounds = self.bounds
        new_pos = self.start
        on_wall = False
        direction = self.start_direction

        for index in range(self.max_steps):
            position = new_pos

            if self._reached_end(position):
                logger.debug("point %d: end (%.6f, %.6f)", index, self.end.x, self.end.y)
                yield self.end
                return

            logger.debug("point %d: (%.6f, %.6f)", index, position.x, position.y)
            yield position

            if bounds.on_vertical_wall(position) and not on_wall:
                on_wall = True
                new_pos = Position(
                    position.x, wall_jog(position.y, bounds.y[1], self.gap_y)
                )
                direction = not direction
            elif bounds.on_horizontal_wall(position) and not on_wall:
                on_wall = True
                new_pos = Position(
                    wall_jog(position.x, bounds.x[1], self.gap_x), position.y
                )
                direction = not direction
            else:
                on_wall = False
                new_pos = dist_on_angle(
                    position, self.step, self.angle, direction, bounds
                )

        raise NonTerminatingPathError(
            f"No end point {self.end} after {self.max_steps} steps "
            f"(last position {new_pos})"
        )

    def run(self) -> Path:
        """Generate the complete path.

        Raises
        ------
        DegenerateAngleError
            If a wall intersection cannot be resolved.
        NonTerminatingPathError
            If ``max_steps`` points are emitted without reaching *end*.
        """
        path = list(self)
        logger.info(
            "Zigzag path: %d points, %.1f mm travel, angle %.0f°",
            len(path), path_length(path), math.degrees(self.angle),
        )
        return path


def plot_path(source: Rectangle, config: PlotConfig) -> Path:
    """Zigzag path covering *source* pixel extents scaled per *config*."""
    generator, _ = ZigzagPathGenerator.from_config(source, config)
    return generator.run()
