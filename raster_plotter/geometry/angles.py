"""Plot angle normalization.

Angles arrive in degrees from the configuration.  They are reduced to a
whole number of degrees in [0, 360) *before* conversion to radians: the
fractional part of the input is discarded, so sub-degree precision is not
honored.  ``45.9`` plots exactly like ``45``.
"""

from __future__ import annotations

import math

from raster_plotter.geometry.errors import DegenerateAngleError

# sin/cos magnitudes below this are treated as exact zeros
AXIS_EPS = 1e-12


def truncate_degrees(deg: float) -> int:
    """Whole degrees in [0, 360), truncating the input toward zero first.

    Raises
    ------
    DegenerateAngleError
        If *deg* is NaN or infinite.
    """
    if not math.isfinite(deg):
        raise DegenerateAngleError(f"Plot angle must be finite, got {deg}")
    return int(deg) % 360


def normalize_degrees(deg: float) -> float:
    """Radians in [0, 2π) for *deg*: ``(π/180) * (trunc(deg) mod 360)``."""
    return (math.pi / 180.0) * truncate_degrees(deg)


def is_axis_aligned(rad: float) -> bool:
    """True for multiples of 90°, where the wall gap math is singular."""
    return abs(math.sin(rad)) < AXIS_EPS or abs(math.cos(rad)) < AXIS_EPS
