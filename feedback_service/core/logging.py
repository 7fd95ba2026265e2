import logging

from feedback_service.core.config import settings


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        fmt = logging.Formatter("[%(levelname)s] %(name)s: %(message)s")
        handler.setFormatter(fmt)
        logger.addHandler(handler)
        logger.setLevel(settings.LOG_LEVEL.upper())
    return logger


"""
Logging setup and it configures:
- Log format
- Log level (LOG_LEVEL setting)
- Output destination

The main purpose:
Standardized application logging.
"""
