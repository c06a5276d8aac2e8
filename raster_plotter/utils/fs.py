"""Filesystem helpers for plot configs and preview images.

    - ``load_yaml``: read a plot config with ``yaml.safe_load``; parse
      errors name the offending file
    - ``atomic_save_image``: encode a preview next to its destination and
      rename it into place, so an image viewer watching the output never
      opens a half-written PNG
    - ``ensure_dir``: create an output directory and its parents

Usage:
    from raster_plotter.utils import fs
    raw = fs.load_yaml("job.yaml")
    fs.atomic_save_image(rgb, "previews/path.png", {"dpi": (500, 500)})
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
import yaml
from PIL import Image


def ensure_dir(p: Union[str, Path]) -> Path:
    """Create *p* (and parents) if missing; return it as a Path."""
    p = Path(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


def load_yaml(path: Union[str, Path]) -> Any:
    """Parse a YAML file.

    Returns whatever the document holds; ``None`` for an empty file.  The
    caller decides whether a non-mapping root is acceptable.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    yaml.YAMLError
        If the document is malformed.  The message carries *path*.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"{path}: {e}") from e


def atomic_save_image(
    img: np.ndarray,
    path: Union[str, Path],
    pil_kwargs: Optional[Dict[str, Any]] = None,
) -> Path:
    """Write *img* to *path* via a sibling tmp file and ``os.replace``.

    Parameters
    ----------
    img : np.ndarray
        (H, W) grayscale or (H, W, 3|4) colour.  Non-uint8 input is
        clipped to [0, 255].
    path : Union[str, Path]
        Destination; its suffix picks the Pillow encoder.  Missing parent
        directories are created.
    pil_kwargs : Optional[Dict[str, Any]]
        Passed to ``Image.save`` (e.g. ``{"dpi": (500, 500)}``).

    Returns
    -------
    Path
        *path*, once the rename has completed.

    Raises
    ------
    RuntimeError
        If encoding or renaming fails.  No tmp file is left behind.
    """
    path = Path(path)
    ensure_dir(path.parent)

    if img.dtype != np.uint8:
        img = np.clip(img, 0, 255).astype(np.uint8)

    # sibling tmp keeps the suffix so Pillow infers the same format
    tmp_path = path.with_name(f"{path.stem}.tmp{path.suffix}")
    try:
        Image.fromarray(img).save(tmp_path, **(pil_kwargs or {}))
        os.replace(tmp_path, path)
    except (OSError, ValueError, KeyError) as e:
        tmp_path.unlink(missing_ok=True)
        raise RuntimeError(f"Could not write image {path}: {e}") from e

    return path
