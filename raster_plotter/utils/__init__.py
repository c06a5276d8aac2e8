"""Cross-cutting utilities (lowest dependency layer).

    - Safe YAML loading and atomic image writes (fs)
    - Unified logging (logging_config)

No module in utils/ may import from upper layers.

Convenience imports:
    from raster_plotter.utils import fs
    from raster_plotter.utils.logging_config import setup_logging, get_logger
"""

from . import fs
from . import logging_config

from .logging_config import get_logger, pop_context, push_context, setup_logging

__all__ = [
    'fs',
    'logging_config',
    'setup_logging',
    'get_logger',
    'push_context',
    'pop_context',
]
