"""Plot configuration loading and validation."""

from raster_plotter.configs.loader import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    Markers,
    OffsetMm,
    PlotConfig,
    PreviewConfig,
    SizeMm,
    SpeedProfile,
    Termination,
    apply_overrides,
    load_config,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ConfigError",
    "Markers",
    "OffsetMm",
    "PlotConfig",
    "PreviewConfig",
    "SizeMm",
    "SpeedProfile",
    "Termination",
    "apply_overrides",
    "load_config",
]
