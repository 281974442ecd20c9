"""Logging setup for scripts and the API server."""

import logging
import sys
from typing import Optional

from opensearch_navigator.config import get_settings


_QUIET_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger once.
    
    Args:
        level: Log level name; defaults to NAVIGATOR_LOG_LEVEL
    """
    level_name = (level or get_settings().log_level).upper()
    root_level = getattr(logging, level_name, logging.INFO)
    
    root = logging.getLogger()
    root.setLevel(root_level)
    
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-8s %(name)s - %(message)s")
        )
        root.addHandler(handler)
    
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(root_level, logging.WARNING))
