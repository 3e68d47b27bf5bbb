"""Console logging setup for the command line.

Library modules only create loggers with ``logging.getLogger(__name__)``;
handlers are installed here, once, by the application.
"""

from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_handler: logging.StreamHandler | None = None


def setup_logging(level: int = logging.INFO) -> None:
    """Attach a console handler to the ``mathbox`` logger.

    Repeated calls adjust the level and point the handler at the current
    ``sys.stderr``.
    """
    global _handler
    logger = logging.getLogger("mathbox")
    logger.setLevel(level)
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(_handler)
    _handler.setStream(sys.stderr)
    _handler.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
