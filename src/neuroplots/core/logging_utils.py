"""
Logging setup for topography rendering.

Library modules log through ``logging.getLogger(__name__)``; entry
points call :func:`setup_logging` once to get console and file output.
"""

import logging
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "neuroplots"
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Configure the package logger.

    Calling it again only updates the level and adds a file handler
    for a log file that is not attached yet.

    Args:
        level: Logging level for the package logger.
        log_file: Optional path of a log file to append to.

    Returns:
        The package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    if log_file is not None:
        log_path = Path(log_file).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        attached = {
            Path(h.baseFilename).resolve() for h in logger.handlers
            if isinstance(h, logging.FileHandler)
        }
        if log_path not in attached:
            file_handler = logging.FileHandler(log_path)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
