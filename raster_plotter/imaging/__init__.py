"""
Imaging module.

Source image decoding (pixel extents + luminance) and path preview
rendering.
"""

from raster_plotter.imaging.preview import render_path_preview, save_path_preview
from raster_plotter.imaging.source import SourceImage, load_source_image

__all__ = [
    "SourceImage",
    "load_source_image",
    "render_path_preview",
    "save_path_preview",
]
