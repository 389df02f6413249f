"""Logging setup."""

import logging
import os
import sys
from typing import Optional


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Configure process-wide logging.

    Args:
        level: Logging level name; defaults to ``EDGEBOARD_LOG_LEVEL`` or INFO
        log_file: Optional file path to also write logs to
    """
    level_name = (level or os.environ.get("EDGEBOARD_LOG_LEVEL", "INFO")).upper()
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )
