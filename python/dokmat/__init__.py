import logging
import os

from ._logging import LOGGER_NAME, setup_logger
from ._runtime import ENV_LOG_LEVEL, get_log_level, set_log_level
from .errors import (
    DokmatError,
    InvalidArgumentError,
    OutOfBoundsError,
    ShapeMismatchError,
)
from .sparse import DOK, SparseMatrix

__version__ = "0.1.0"

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())
if os.environ.get(ENV_LOG_LEVEL):
    logging.getLogger(LOGGER_NAME).setLevel(get_log_level())

__all__ = [
    "__version__",
    "DOK",
    "SparseMatrix",
    "DokmatError",
    "OutOfBoundsError",
    "ShapeMismatchError",
    "InvalidArgumentError",
    "set_log_level",
    "get_log_level",
    "setup_logger",
]
