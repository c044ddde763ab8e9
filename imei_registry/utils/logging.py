"""
Logging configuration for the registry service.
"""

import logging
import sys

from imei_registry.utils import settings


def setup_logging() -> None:
    """
    Configure root logging once for the whole application.

    Logs go to stdout so the process supervisor can collect them.
    """
    logging.basicConfig(
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
