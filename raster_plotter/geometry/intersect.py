"""Wall intersection for a single step along the plot angle.

The travel vector for a plot angle ``a`` is ``sign * (sin a, -cos a)``
with ``sign = +1`` for the forward direction and ``-1`` for the reverse.
For first-quadrant angles forward travel runs down and to the right.

Each step considers three candidates:
    1. vertical wall: x fixed at the left/right wall being approached
    2. horizontal wall: y fixed at the bottom/top wall being approached
    3. free step: ``distance`` mm along the travel vector

The free step wins when it stays inside the bounds.  Otherwise the wall
candidates are scanned in order and the nearest one is taken, with ties
going to the later candidate (the horizontal wall).

For first-quadrant angles the walls approached are
``bounds.x[edge]`` and ``bounds.y[1 - edge]`` with
``edge = (sign + 1) // 2``.
"""

from __future__ import annotations

import math

from raster_plotter.geometry.angles import AXIS_EPS
from raster_plotter.geometry.errors import DegenerateAngleError
from raster_plotter.geometry.primitives import Bounds, Position


def point_separation(pt1: Position, pt2: Position) -> float:
    """Euclidean distance between two positions."""
    return math.hypot(pt1.x - pt2.x, pt1.y - pt2.y)


def direction_sign(direction: bool) -> float:
    """``+1.0`` for forward travel, ``-1.0`` for reverse."""
    return 1.0 if direction else -1.0


def travel_vector(angle: float, direction: bool) -> tuple[float, float]:
    """Unit travel vector ``sign * (sin a, -cos a)``.

    A vertical component below ``AXIS_EPS`` is returned as an exact zero so
    that 90° and 270° travel stays on its row.

    Raises
    ------
    DegenerateAngleError
        If *angle* is non-finite or a multiple of π (travel parallel to the
        vertical walls, so the vertical-wall candidate does not exist).
    """
    if not math.isfinite(angle):
        raise DegenerateAngleError(f"Angle must be finite, got {angle!r}")
    sin_a = math.sin(angle)
    cos_a = math.cos(angle)
    if abs(sin_a) < AXIS_EPS:
        raise DegenerateAngleError(
            f"Angle {angle!r} rad runs parallel to the vertical walls; "
            "no vertical-wall intersection exists"
        )
    sign = direction_sign(direction)
    dy = -sign * cos_a if abs(cos_a) >= AXIS_EPS else 0.0
    return sign * sin_a, dy


def _clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def wall_candidates(
    pt: Position, travel: tuple[float, float], bounds: Bounds
) -> list[Position]:
    """Points where the travel line through *pt* meets the walls ahead.

    Returns the vertical-wall candidate, followed by the horizontal-wall
    candidate when *travel* has a vertical component.  The solved
    coordinate is clamped into *bounds*.
    """
    dx, dy = travel
    (x_min, x_max), (y_min, y_max) = bounds.x, bounds.y

    # Wall is boundary
    wall_x = x_max if dx > 0 else x_min
    t = (wall_x - pt.x) / dx
    candidates = [Position(wall_x, _clamp(pt.y + t * dy, y_min, y_max))]

    # Top/bottom is boundary
    if dy != 0.0:
        wall_y = y_max if dy > 0 else y_min
        t = (wall_y - pt.y) / dy
        candidates.append(Position(_clamp(pt.x + t * dx, x_min, x_max), wall_y))

    return candidates


def dist_on_angle(
    pt: Position,
    distance: float,
    angle: float,
    direction: bool,
    bounds: Bounds,
) -> Position:
    """Next point from *pt* along *angle*, clipped to *bounds*.

    Parameters
    ----------
    pt : Position
        Current position, inside or on *bounds*.
    distance : float
        Requested step length in mm (the plot density).
    angle : float
        Plot angle in radians.
    direction : bool
        Travel direction; ``True`` is forward.
    bounds : Bounds
        Rectangle the path must stay within.

    Returns
    -------
    Position
        The free step when it stays inside *bounds*, otherwise the nearest
        wall hit.  Never outside *bounds* for a start point inside them.

    Raises
    ------
    DegenerateAngleError
        If *angle* is non-finite or a multiple of π.
    """
    travel = travel_vector(angle, direction)

    target = Position(pt.x + travel[0] * distance, pt.y + travel[1] * distance)
    if bounds.contains(target):
        return target

    candidates = wall_candidates(pt, travel, bounds)
    hit = nearest_candidate(pt, candidates, distance)
    if hit is None:
        # free step landed a rounding error past a wall
        hit = nearest_candidate(pt, candidates, math.inf)
    return hit


def nearest_candidate(
    pt: Position, candidates: list[Position], best: float
) -> Position | None:
    """Last candidate whose separation is ``<=`` the running best."""
    target = None
    for candidate in candidates:
        sep = point_separation(pt, candidate)
        if sep <= best:
            best = sep
            target = candidate
    return target
