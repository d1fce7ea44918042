"""Logging setup for applications embedding proofforest.

Library modules only create loggers; handlers are attached here, on request.
"""

import logging
from typing import Optional, Union

from .config import get_config


def setup_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Attach a stream handler to the ``proofforest`` logger.

    Args:
        level: Log level name or number. Defaults to ``logging.level`` from
            the configuration.

    Returns:
        The configured package logger
    """
    config = get_config()
    if level is None:
        level = config.get('logging.level', 'WARNING')
    if isinstance(level, str):
        name = level.upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")

    logger = logging.getLogger('proofforest')
    logger.setLevel(level)
    if not any(getattr(h, '_proofforest', False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler._proofforest = True
        logger.addHandler(handler)
    for handler in logger.handlers:
        if getattr(handler, '_proofforest', False):
            handler.setFormatter(logging.Formatter(config.get('logging.format')))
    return logger
