import logging
import os
import sys

LOG_FORMAT = "[%(levelname)s] %(asctime)s - %(name)s - %(message)s"


def setup_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

        logger.addHandler(handler)
        logger.propagate = False

    return logger
