"""Source image decoding.

Decodes a PNG/JPEG (anything Pillow reads) into the pixel extents that
drive scaling plus a luminance array.  The path generator only uses the
extents; luminance is carried for the device-output stage.

Image frame: row 0 is the top of the image, values in [0, 1] with
1.0 = white.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from raster_plotter.geometry.errors import DegenerateInputError
from raster_plotter.geometry.primitives import Rectangle

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SourceImage:
    """Decoded source image.

    Attributes
    ----------
    path : Path
        File the image was read from.
    size : Rectangle
        Pixel extents ``(width, height)``.
    luminance : np.ndarray
        Shape (H, W), float32 in [0, 1].
    """

    path: Path
    size: Rectangle
    luminance: np.ndarray

    def luminance_at(self, x: int, y: int) -> float:
        """Luminance of pixel column *x*, row *y*."""
        return float(self.luminance[y, x])


def load_source_image(path: str | Path) -> SourceImage:
    """Decode *path* into a :class:`SourceImage`.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    ValueError
        If Pillow cannot decode the file.
    DegenerateInputError
        If the image has no pixels.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")

    try:
        with Image.open(path) as img:
            img.load()
            gray = img.convert("L")
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Cannot decode image {path}: {e}") from e

    width, height = gray.size
    if width == 0 or height == 0:
        raise DegenerateInputError(f"Image {path} has no pixels ({width}x{height})")

    luminance = np.asarray(gray, dtype=np.float32) / 255.0
    logger.info("Loaded %s: %dx%d px", path.name, width, height)

    return SourceImage(
        path=path,
        size=Rectangle(float(width), float(height)),
        luminance=luminance,
    )
