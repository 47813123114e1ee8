"""
Logging setup for the storefront.

Everything the application logs goes through loggers below the
``storefront_api`` package logger, so handlers are attached there and
not to the root logger; uvicorn keeps its own access and error logs.
The level and the optional log file come from ``settings`` (``LOG_LEVEL``
and ``LOG_FILE``).
"""

import logging
from pathlib import Path

from .config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_CONSOLE = "storefront-console"
_FILE = "storefront-file"


def setup_logging(name: str = "storefront_api") -> logging.Logger:
    """Attach console (and file) handlers to the ``name`` logger.

    Repeated calls update the level but never add a second handler of
    the same kind.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    logger.propagate = False

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    present = {handler.get_name() for handler in logger.handlers}

    if _CONSOLE not in present:
        console = logging.StreamHandler()
        console.set_name(_CONSOLE)
        console.setFormatter(formatter)
        logger.addHandler(console)

    if settings.log_file and _FILE not in present:
        file_handler = logging.FileHandler(Path(settings.log_file).resolve(), encoding="utf-8")
        file_handler.set_name(_FILE)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
