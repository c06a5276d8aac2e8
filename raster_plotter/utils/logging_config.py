"""Unified logging configuration for the command-line entrypoints.

Provides:
    - Console handler (stderr) with optional ANSI colors
    - Optional file handler, plain or rotating by size
    - JSON line output for machine ingestion
    - Contextual fields (image, angle, run) on every record
    - Python warnings routed into logging

Public API:
    setup_logging(log_level="INFO", log_file=None, json=False,
                  context={"app": "plot_image"})
    get_logger(name)
    push_context(image="photo.png")
    pop_context(keys=["image"])

Format examples:
    Human: 2026-03-02T09:12:44.101Z | INFO     | app=plot_image | Path complete
    JSON:  {"t":"2026-03-02T09:12:44.101000+00:00","lvl":"INFO","msg":"..."}

Context uses contextvars, so it is isolated per thread.
Idempotent: repeated setup_logging() calls replace handlers, never stack them.
"""

import contextvars
import json as jsonlib
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional


_context_var: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    'raster_plotter_logging_context', default={}
)

_configured = False


class ContextFormatter(logging.Formatter):
    """Formatter that appends contextual fields to each record.

    Supports:
        - Human-readable lines with optional level colors
        - JSON lines for machine ingestion
    """

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, fmt_mode: str = "human", use_color: bool = True):
        super().__init__()
        if fmt_mode not in ("human", "json"):
            raise ValueError(f"Unknown format mode: {fmt_mode}. Use 'human' or 'json'.")
        self.fmt_mode = fmt_mode
        self.use_color = use_color and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        context = _context_var.get()
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)

        if self.fmt_mode == "json":
            entry = {
                't': ts.isoformat(),
                'lvl': record.levelname,
                'name': record.name,
                'pid': os.getpid(),
                'msg': record.getMessage(),
            }
            entry.update(context)
            if record.exc_info:
                entry['exc'] = self.formatException(record.exc_info)
            return jsonlib.dumps(entry, default=str)

        level = f"{record.levelname:8s}"
        if self.use_color:
            level = f"{self.COLORS.get(record.levelname, '')}{level}{self.RESET}"

        parts = [ts.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3] + 'Z', '|', level, '|']
        if context:
            parts.append(' '.join(f"{k}={v}" for k, v in context.items()) + ' |')
        parts.append(record.getMessage())
        line = ' '.join(parts)

        if record.exc_info:
            line += '\n' + self.formatException(record.exc_info)
        return line


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json: bool = False,
    color: bool = True,
    to_stderr: bool = True,
    rotate: Optional[Dict[str, Any]] = None,
    capture_warnings: bool = True,
    quiet_libs: Optional[List[str]] = None,
    context: Optional[Dict[str, Any]] = None,
) -> List[logging.Handler]:
    """Configure the root logger (idempotent).

    Parameters
    ----------
    log_level : str
        "DEBUG", "INFO", "WARNING", "ERROR" or "CRITICAL"
    log_file : str, optional
        Log file path; None for no file logging
    json : bool
        Emit JSON lines instead of human-readable text, default False
    color : bool
        ANSI colors on the console when it is a TTY, default True
    to_stderr : bool
        Log to stderr, default True
    rotate : dict, optional
        Size rotation for the file handler:
        {"max_bytes": 10_000_000, "backup_count": 3}
    capture_warnings : bool
        Route Python warnings into logging, default True
    quiet_libs : list[str], optional
        Library loggers forced to WARNING (e.g., ["PIL"])
    context : dict, optional
        Initial contextual fields (e.g., {"app": "plot_image"})

    Returns
    -------
    list[logging.Handler]
        Handlers installed on the root logger

    Raises
    ------
    ValueError
        If *log_level* is not a known level name.
    """
    global _configured

    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    root = logging.getLogger()
    if _configured:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)

    fmt_mode = "json" if json else "human"
    handlers: List[logging.Handler] = []

    if to_stderr:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(ContextFormatter(fmt_mode, use_color=color and not json))
        handlers.append(console)

    if log_file:
        handlers.append(_create_file_handler(log_file, rotate, fmt_mode))

    for handler in handlers:
        root.addHandler(handler)

    if context:
        push_context(**context)

    for lib in quiet_libs or ["PIL"]:
        logging.getLogger(lib).setLevel(logging.WARNING)

    if capture_warnings:
        logging.captureWarnings(True)

    _configured = True
    return handlers


def _create_file_handler(
    log_file: str,
    rotate: Optional[Dict[str, Any]],
    fmt_mode: str,
) -> logging.Handler:
    """File handler, rotating by size when *rotate* is given."""
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    if rotate:
        handler: logging.Handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=rotate.get('max_bytes', 10_000_000),
            backupCount=rotate.get('backup_count', 3),
        )
    else:
        handler = logging.FileHandler(log_file)

    handler.setFormatter(ContextFormatter(fmt_mode, use_color=False))
    return handler


def get_logger(name: str) -> logging.Logger:
    """Get logger by name (typically __name__)."""
    return logging.getLogger(name)


def push_context(**kwargs: Any) -> None:
    """Add contextual fields to all subsequent log records.

    Examples
    --------
    >>> push_context(app="plot_image")
    >>> push_context(image="photo.png")  # → "... | app=plot_image image=photo.png | ..."
    """
    _context_var.set({**_context_var.get(), **kwargs})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Remove contextual fields; None clears all of them."""
    if keys is None:
        _context_var.set({})
        return
    current = dict(_context_var.get())
    for key in keys:
        current.pop(key, None)
    _context_var.set(current)
