#!/usr/bin/env python3
"""
Plot Image Script.

Generate the zigzag fill path for an image and optionally render a preview.

Usage:
    python -m raster_plotter.scripts.plot_image --file photo.png
    python -m raster_plotter.scripts.plot_image -f photo.png --width 80 --height 60 --angle 30
    python -m raster_plotter.scripts.plot_image -f photo.png --image --output out/path.png
    python -m raster_plotter.scripts.plot_image -f photo.png --config job.yaml --log-level DEBUG

Flags left unset fall back to the config file (``--config``, or the
``plot.yaml`` shipped with the package).
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Sequence

from raster_plotter.configs.loader import ConfigError, load_config
from raster_plotter.geometry.errors import PathGenerationError
from raster_plotter.imaging.preview import save_path_preview
from raster_plotter.imaging.source import load_source_image
from raster_plotter.path.zigzag import ZigzagPathGenerator, path_length
from raster_plotter.utils.logging_config import push_context, setup_logging

logger = logging.getLogger(__name__)

# argparse dest -> dotted config key
OVERRIDE_KEYS = {
    "width": "size_mm.width",
    "height": "size_mm.height",
    "start_x": "position_mm.x",
    "start_y": "position_mm.y",
    "force_dimensions": "force_dimensions",
    "separation": "line_separation_mm",
    "gap": "nozzle_gap_mm",
    "angle": "plot_angle_deg",
    "density": "plot_density_mm",
    "direction": "plot_direction_deg",
    "start_direction": "start_direction",
    "speed_black": "speed.black_mm_s",
    "speed_white": "speed.white_mm_s",
    "speed_coefficient": "speed.coefficient",
    "print_start": "markers.plot_start",
    "print_end": "markers.plot_end",
    "image": "preview.enabled",
    "output": "preview.output",
    "dpi": "preview.dpi",
    "max_steps": "termination.max_steps",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a zigzag plot path for an image",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--file", "-f", type=str, required=True, help="Image file to process")
    parser.add_argument("--config", "-c", type=str, help="Plot configuration file (YAML)")

    # Plot area
    parser.add_argument("--width", type=float, help="Maximum image width (mm)")
    parser.add_argument("--height", type=float, help="Maximum image height (mm)")
    parser.add_argument("--start-x", type=float, help="X position of the image origin (mm)")
    parser.add_argument("--start-y", type=float, help="Y position of the image origin (mm)")
    parser.add_argument(
        "--force-dimensions",
        action="store_true",
        default=None,
        help="Force given dimensions instead of fitting",
    )

    # Path shape
    parser.add_argument("--separation", type=float, help="Separation between lines (mm)")
    parser.add_argument("--gap", type=float, help="Nozzle gap to print target (mm)")
    parser.add_argument("--angle", type=float, help="Angle to plot at (degrees)")
    parser.add_argument("--density", type=float, help="Density to plot at (mm)")
    parser.add_argument("--direction", type=float, help="Angle to begin plotting from (degrees)")
    parser.add_argument(
        "--start-direction",
        action="store_true",
        default=None,
        help="Set the initial travel direction flag",
    )
    parser.add_argument("--max-steps", type=int, help="Give up after this many points")

    # Device-output passthrough
    parser.add_argument("--speed-black", type=float, help="Speed to achieve black (mm/s)")
    parser.add_argument("--speed-white", type=float, help="Minimum speed to achieve white (mm/s)")
    parser.add_argument("--speed-coefficient", type=float, help="Coefficient to tune speed curve")
    parser.add_argument("--print-start", type=str, help="Print start marker")
    parser.add_argument("--print-end", type=str, help="Print end marker")

    # Preview
    parser.add_argument(
        "--image",
        action="store_true",
        default=None,
        help="Draw an image of the plot path",
    )
    parser.add_argument("--output", "-o", type=str, help="Preview output file (PNG)")
    parser.add_argument("--dpi", type=float, help="Preview resolution (dots per inch)")

    # Logging
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    parser.add_argument("--log-file", type=str, help="Also log to this file")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    return parser


def collect_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Dotted config overrides for every flag the user actually set."""
    return {
        key: getattr(args, dest)
        for dest, key in OVERRIDE_KEYS.items()
        if getattr(args, dest) is not None
    }


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(
        args.log_level,
        args.log_file,
        json=args.json_logs,
        context={"app": "plot_image"},
    )

    try:
        config = load_config(args.config, collect_overrides(args))
    except (ConfigError, FileNotFoundError) as e:
        logger.error("Error loading config: %s", e)
        return 1

    push_context(image=args.file)

    try:
        source = load_source_image(args.file)
        generator, ratio = ZigzagPathGenerator.from_config(source.size, config)
        logger.info(
            "Scale (%.6g, %.6g) mm/px, start (%.3f, %.3f), end (%.3f, %.3f)",
            ratio.x, ratio.y,
            generator.start.x, generator.start.y,
            generator.end.x, generator.end.y,
        )
        path = generator.run()
    except (FileNotFoundError, ValueError, PathGenerationError) as e:
        logger.error("Path generation failed: %s", e)
        return 1

    logger.info("done: %d points, %.1f mm", len(path), path_length(path))

    if config.preview.enabled:
        try:
            save_path_preview(path, config.preview.output, config.preview)
        except (ValueError, RuntimeError) as e:
            logger.error("Preview failed: %s", e)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
