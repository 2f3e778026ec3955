import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Configure the root handler once and return a named logger.

    Args:
        name (str): Logger name, usually ``__name__``.
        level (Optional[str]): Level name such as "INFO"; defaults to Config.LOG_LEVEL.

    Returns:
        logging.Logger: The configured logger.
    """
    if level is None:
        from chainlance.config import Config
        level = Config.LOG_LEVEL

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level.upper())
    return logging.getLogger(name)
