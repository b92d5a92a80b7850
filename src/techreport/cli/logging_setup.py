"""Logging setup: Rich console handler on stderr plus an optional log file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_FILE_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    *,
    console: Console | None = None,
) -> logging.Logger:
    """Configure and return the ``techreport`` logger.

    Parameters
    ----------
    level:
        Logging level name (e.g. ``"DEBUG"``). Unknown names fall back to
        INFO.
    log_file:
        Optional path to a log file written with timestamps.
    console:
        Optional Rich console for the console handler.
    """
    numeric = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger("techreport")
    logger.setLevel(numeric)

    # Repeated calls must not stack handlers
    logger.handlers.clear()

    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
    )
    rich_handler.setLevel(numeric)
    logger.addHandler(rich_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file))
        file_handler.setLevel(numeric)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    return logger
