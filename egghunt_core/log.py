from __future__ import annotations

import logging
import os
from typing import Optional

from .config import env_flag

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Sets up root logging once; EGGHUNT_DEBUG wins over EGGHUNT_LOG_LEVEL."""
    if level is None:
        if env_flag('EGGHUNT_DEBUG'):
            level = 'DEBUG'
        else:
            level = os.getenv('EGGHUNT_LOG_LEVEL', 'INFO')
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    logging.getLogger('egghunt_core').setLevel(numeric)
