"""Logging setup for scripts. Library modules only ever call getLogger."""

import logging
from typing import Optional, Union

from .config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[Union[int, str]] = None) -> None:
    """
    Configure root logging.

    Args:
        level: Explicit level; falls back to Settings.LOG_LEVEL when omitted
    """
    if level is None:
        level = get_settings().LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
