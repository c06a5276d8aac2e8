"""Immutable 2-D value types shared by the geometry and path layers.

Every type is a frozen, slotted dataclass so instances can be compared
componentwise (``Position(0, 0) == Position(0.0, 0.0)``) and handed
between stages without defensive copies.

Units:
    - ``Rectangle``, ``Position``, ``Bounds``: millimetres, except when a
      ``Rectangle`` describes source pixel extents
    - ``Pixel``: source-image pixels
    - ``Scale``: millimetres per pixel, per axis
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Sizes and ratios
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Rectangle:
    """Width and height of an area.  Carries no position."""

    width: float
    height: float


@dataclass(frozen=True, slots=True)
class Scale:
    """Per-axis ratio from one source pixel to physical units."""

    x: float
    y: float


# ---------------------------------------------------------------------------
# Coordinates
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Position:
    """Physical coordinate in mm.  The unit of every generated path."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Pixel:
    """Source-image coordinate."""

    x: float
    y: float


Path = list[Position]
"""Ordered positions; list order is the device's travel order."""


# ---------------------------------------------------------------------------
# Bounds
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Bounds:
    """Closed ``(min, max)`` interval per axis.

    Derived once per generation run from the start and end corners and
    never modified afterwards.
    """

    x: tuple[float, float]
    y: tuple[float, float]

    @classmethod
    def from_corners(cls, start: Position, end: Position) -> Bounds:
        """Bounds spanned by two opposite corners."""
        return cls(x=(start.x, end.x), y=(start.y, end.y))

    def contains(self, pt: Position) -> bool:
        """True when *pt* lies inside or on the rectangle."""
        return (
            self.x[0] <= pt.x <= self.x[1]
            and self.y[0] <= pt.y <= self.y[1]
        )

    def on_vertical_wall(self, pt: Position) -> bool:
        """True when *pt* sits exactly on the left or right wall."""
        return pt.x == self.x[0] or pt.x == self.x[1]

    def on_horizontal_wall(self, pt: Position) -> bool:
        """True when *pt* sits exactly on the bottom or top wall."""
        return pt.y == self.y[0] or pt.y == self.y[1]
