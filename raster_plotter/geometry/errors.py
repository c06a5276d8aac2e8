"""Exceptions raised by path generation.

Every error here is fatal for the current run: the path is meaningless
without full connectivity, so no partial result is ever returned.
"""

from __future__ import annotations


class PathGenerationError(Exception):
    """Base class for all path generation failures."""

    pass


class DegenerateInputError(PathGenerationError, ValueError):
    """Raised for zero, negative, or non-finite extents and step sizes."""

    pass


class DegenerateAngleError(PathGenerationError, ValueError):
    """Raised when the plot angle makes the wall intersection math singular."""

    pass


class NonTerminatingPathError(PathGenerationError, RuntimeError):
    """Raised when generation exceeds its step cap without reaching the end."""

    pass
