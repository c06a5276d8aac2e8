"""Shared fixtures for raster_plotter tests."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import numpy as np
import pytest
from PIL import Image

from raster_plotter.configs.loader import PlotConfig, load_config
from raster_plotter.utils import logging_config


@pytest.fixture()
def default_config() -> PlotConfig:
    """Load the default plot.yaml shipped with the package."""
    return load_config()


@pytest.fixture()
def make_png(tmp_path: Path) -> Callable[..., Path]:
    """Write a solid-colour PNG of the given pixel size and return its path."""

    def _make(width: int, height: int, value: int = 255, name: str = "source.png") -> Path:
        arr = np.full((height, width, 3), value, dtype=np.uint8)
        path = tmp_path / name
        Image.fromarray(arr).save(path)
        return path

    return _make


@pytest.fixture(autouse=True)
def _isolate_logging(monkeypatch: pytest.MonkeyPatch):
    """Undo root logger changes made by setup_logging()."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    monkeypatch.setattr(logging_config, "_configured", False)
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    logging_config.pop_context()
    logging.captureWarnings(False)
