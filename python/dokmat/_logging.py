import logging
import sys
from pathlib import Path
from typing import Optional

LOGGER_NAME = "dokmat"

FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
        name: str = LOGGER_NAME,
        level: int = logging.INFO,
        log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Set up a logger with console output and an optional log file.

    Parameters
    ----------
    name : str
        Logger name. Defaults to the package root logger so every module
        logger under ``dokmat.*`` inherits the handlers.
    level : int
        Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    log_file : str, optional
        If provided, also append records to this file.

    Returns
    -------
    logging.Logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(fmt=FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode="a")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def set_handler_levels(logger: logging.Logger, level: int) -> None:
    """Update logger and all its handlers to the new level."""
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
