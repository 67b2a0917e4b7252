import logging
import os
import sys
from typing import Optional, Sequence

SERVICE_LOGGERS = ("recommender", "rpyc_server")

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None, names: Sequence[str] = SERVICE_LOGGERS) -> None:
    """
    Route the service's loggers to stdout.

    The level comes from `level` or LOG_LEVEL (INFO when neither is set).
    Calling this again only updates the level.
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)

    for name in names:
        logger = logging.getLogger(name)
        logger.setLevel(numeric_level)
        logger.propagate = False
        if any(getattr(handler, "stream", None) is sys.stdout for handler in logger.handlers):
            continue
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
