"""Plot configuration loader.

Loads ``plot.yaml`` and validates it into a frozen pydantic model.  Every
value the path generator consumes comes from here; nothing in the
geometry or path layers reads global state.

Schema version ``plot.v1``:
    - Geometry: millimetres
    - Speeds: mm/s (passed through to the device-output stage)
    - Angles: degrees, truncated to whole degrees by the generator

Command-line flags are applied as dotted-key overrides on the raw YAML
mapping *before* validation, so overrides get the same checks as the file.

Usage::

    from raster_plotter.configs.loader import load_config
    cfg = load_config()                                  # shipped defaults
    cfg = load_config("job.yaml", {"plot_angle_deg": 30, "size_mm.width": 80})
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from raster_plotter.geometry.primitives import Position, Rectangle
from raster_plotter.utils.fs import load_yaml

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "plot.v1"
DEFAULT_CONFIG_PATH = Path(__file__).parent / "plot.yaml"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Raised when configuration loading or validation fails."""

    pass


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class SizeMm(_Frozen):
    """Target plot area (mm)."""
    width: float = Field(..., gt=0.0, allow_inf_nan=False, description="Maximum width (mm)")
    height: float = Field(..., gt=0.0, allow_inf_nan=False, description="Maximum height (mm)")

    def as_rectangle(self) -> Rectangle:
        return Rectangle(self.width, self.height)


class OffsetMm(_Frozen):
    """Physical position of pixel (0, 0) (mm)."""
    x: float = Field(0.0, allow_inf_nan=False)
    y: float = Field(0.0, allow_inf_nan=False)

    def as_position(self) -> Position:
        return Position(self.x, self.y)


class SpeedProfile(_Frozen):
    """Tone → speed curve for the device-output stage (mm/s)."""
    black_mm_s: float = Field(3.0, gt=0.0, le=500.0, description="Speed to achieve black")
    white_mm_s: float = Field(10.0, gt=0.0, le=500.0, description="Minimum speed to achieve white")
    coefficient: float = Field(1.0, gt=0.0, allow_inf_nan=False, description="Speed curve coefficient")

    @model_validator(mode='after')
    def validate_order(self) -> 'SpeedProfile':
        if self.white_mm_s < self.black_mm_s:
            raise ValueError(
                f"white_mm_s ({self.white_mm_s}) must be >= black_mm_s ({self.black_mm_s}): "
                "darker tones are drawn slower"
            )
        return self


class Markers(_Frozen):
    """Program start/end markers for the device-output stage."""
    plot_start: str = "STARTPLOT"
    plot_end: str = "ENDPLOT"


class Termination(_Frozen):
    """End-of-path detection for the zigzag generator."""
    end_tolerance_mm: float = Field(
        1e-9, ge=0.0, le=1e-3, description="Distance per axis at which the end corner counts as reached"
    )
    max_steps: int = Field(5_000_000, ge=1, description="Hard cap on emitted points")


class PreviewConfig(_Frozen):
    """Path preview rendering."""
    enabled: bool = False
    output: str = "path.png"
    dpi: float = Field(500.0, gt=0.0, le=2400.0)
    stroke_width_mm: float = Field(0.1, gt=0.0, le=10.0)
    stroke_rgba: tuple[int, int, int, int] = (64, 64, 64, 128)

    @field_validator('stroke_rgba')
    @classmethod
    def validate_rgba(cls, v: tuple[int, int, int, int]) -> tuple[int, int, int, int]:
        for c in v:
            if not 0 <= c <= 255:
                raise ValueError(f"stroke_rgba components must be in [0, 255], got {v}")
        return v


class PlotConfig(_Frozen):
    """Complete plot configuration (plot.v1.yaml schema)."""
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    schema_version: str = Field(SCHEMA_VERSION, alias="schema", description="Schema version")
    size_mm: SizeMm = SizeMm(width=100.0, height=100.0)
    position_mm: OffsetMm = OffsetMm()
    force_dimensions: bool = False
    line_separation_mm: float = Field(0.4, gt=0.0, allow_inf_nan=False)
    nozzle_gap_mm: float = Field(0.2, ge=0.0, allow_inf_nan=False)
    plot_angle_deg: float = Field(45.0, allow_inf_nan=False)
    plot_direction_deg: float = Field(45.0, allow_inf_nan=False)
    start_direction: bool = False
    plot_density_mm: float = Field(0.5, gt=0.0, allow_inf_nan=False)
    speed: SpeedProfile = SpeedProfile()
    markers: Markers = Markers()
    termination: Termination = Termination()
    preview: PreviewConfig = PreviewConfig()

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != SCHEMA_VERSION:
            raise ValueError(f"Expected schema '{SCHEMA_VERSION}', got '{v}'")
        return v

    @property
    def target(self) -> Rectangle:
        """Target plot area as a geometry rectangle."""
        return self.size_mm.as_rectangle()

    @property
    def offset(self) -> Position:
        """Start offset as a geometry position."""
        return self.position_mm.as_position()


# ---------------------------------------------------------------------------
# Overrides
# ---------------------------------------------------------------------------


def apply_overrides(
    data: Mapping[str, Any], overrides: Mapping[str, Any] | None
) -> dict[str, Any]:
    """Return a copy of *data* with dotted-key *overrides* applied.

    ``{"size_mm.width": 80}`` sets ``data["size_mm"]["width"]``.  ``None``
    values are skipped so unset command-line flags leave the file alone.

    Raises
    ------
    ConfigError
        If an override path runs through a non-mapping value.
    """
    merged = copy.deepcopy(dict(data))
    for dotted, value in (overrides or {}).items():
        if value is None:
            continue
        *parents, leaf = dotted.split(".")
        node = merged
        for key in parents:
            child = node.setdefault(key, {})
            if not isinstance(child, dict):
                raise ConfigError(
                    f"Cannot override '{dotted}': '{key}' is not a section"
                )
            node = child
        node[leaf] = value
        logger.debug("Override %s = %r", dotted, value)
    return merged


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(
    path: str | Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> PlotConfig:
    """Load and validate plot configuration from YAML.

    Parameters
    ----------
    path : str | Path | None
        Path to a ``plot.v1`` YAML file.  ``None`` loads the default
        shipped alongside this module.
    overrides : Mapping[str, Any] | None
        Dotted-key overrides applied before validation.

    Returns
    -------
    PlotConfig
        Fully validated, frozen configuration.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    ConfigError
        If the file is empty, unparsable, or fails validation.
    """
    path = DEFAULT_CONFIG_PATH if path is None else Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    logger.info("Loading configuration from %s", path)

    try:
        data = load_yaml(path)
    except yaml.YAMLError as e:
        raise ConfigError(str(e)) from e
    if data is None:
        raise ConfigError(f"Empty configuration file: {path}")
    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration root must be a mapping, got {type(data).__name__}: {path}"
        )

    data = apply_overrides(data, overrides)

    try:
        return PlotConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Plot config validation failed at {path}: {e}") from e
