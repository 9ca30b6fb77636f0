"""Logging configuration for the résumé matching pipeline."""

import logging
import sys
from typing import Optional

from resume_match_ai.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# PDF parsing and HTTP client libraries log every object / request at DEBUG
NOISY_LIBRARY_LOGGERS = ("pdfminer", "pdfplumber", "httpx", "httpcore", "openai")

_libraries_quieted = False


def _level_from_config() -> int:
    return getattr(logging, LOG_LEVEL.upper(), logging.INFO)


def _quiet_libraries() -> None:
    global _libraries_quieted
    if _libraries_quieted:
        return
    for name in NOISY_LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, _level_from_config()))
    _libraries_quieted = True


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Module logger writing to stdout with the pipeline format.
    Level comes from LOG_LEVEL unless given; the handler is attached once per name.
    """
    _quiet_libraries()
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
        logger.setLevel(level if level is not None else _level_from_config())
    elif level is not None:
        logger.setLevel(level)
    return logger
