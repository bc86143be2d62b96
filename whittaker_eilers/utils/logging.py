"""Logging setup for the whittaker_eilers package"""

import logging
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"

def setup_logging(level: int = logging.INFO, fmt: Optional[str] = None,
                  stream=None) -> logging.Logger:
    """Attach a stream handler to the package logger

    Calling this more than once only updates the level and format of the
    handler installed by the first call.

    Args:
        level: Logging level for the package logger
        fmt: Record format, ``DEFAULT_FORMAT`` if omitted
        stream: Target stream, ``sys.stderr`` if omitted

    Returns:
        The ``whittaker_eilers`` logger
    """
    logger = logging.getLogger("whittaker_eilers")
    logger.setLevel(level)

    handler = next(
        (h for h in logger.handlers if getattr(h, "_whittaker_eilers", False)), None
    )
    if handler is None:
        handler = logging.StreamHandler(stream)
        handler._whittaker_eilers = True
        logger.addHandler(handler)
    elif stream is not None:
        handler.setStream(stream)

    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
    return logger
