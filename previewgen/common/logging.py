# previewgen/common/logging.py
from __future__ import annotations

import logging


def get_logger(name: str = "previewgen", level: int | str | None = None) -> logging.Logger:
    """
    Return the package logger.
    If no handlers are set anywhere, we add a basicConfig once.
    """
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers and not logger.handlers:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if level is not None:
        logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger
