import logging
import logging.handlers
import os
from typing import List, Optional

_LOGGER_NAME = "mandelview"
_FORMAT = "%(asctime)s.%(msecs)03dZ %(levelname)s %(name)s - %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S"

def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)

def parse_level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)

def _handlers(console: bool, log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler())
    if log_file:
        parent = os.path.dirname(log_file)
        if parent:
            os.makedirs(parent, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file, maxBytes=1024 * 1024, backupCount=3, encoding="utf-8"
        ))
    return handlers

def configure_root_logging(*, level: int = logging.INFO, console: bool = True,
                           log_file: Optional[str] = None) -> logging.Logger:
    """Route the ``mandelview`` logger to stderr and, optionally, a rotating file.

    Calling it again replaces the handlers from the previous call.
    """
    logger = get_logger()
    logger.setLevel(level)
    logger.propagate = False
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)
    for handler in _handlers(console, log_file):
        handler.setFormatter(fmt)
        logger.addHandler(handler)
    return logger
