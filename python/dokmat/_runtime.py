import logging
import os

from ._logging import LOGGER_NAME, set_handler_levels

ENV_LOG_LEVEL = "DOKMAT_LOG_LEVEL"

_default_log_level = logging.WARNING
_current_log_level = _default_log_level


def _parse_level(level) -> int:
    if isinstance(level, int):
        return level
    text = str(level).strip()
    if text.isdigit():
        return int(text)
    value = logging.getLevelName(text.upper())
    if not isinstance(value, int):
        raise ValueError(f"unknown log level: {level!r}")
    return value


def set_log_level(level) -> None:
    """Set the level of the ``dokmat`` logger (int or level name).

    While ``DOKMAT_LOG_LEVEL`` is set it takes precedence: the value is
    remembered, but the logger keeps the env level, matching get_log_level().
    """
    global _current_log_level
    _current_log_level = _parse_level(level)
    set_handler_levels(logging.getLogger(LOGGER_NAME), get_log_level())


def get_log_level() -> int:
    # If user set env externally, honor it
    env = os.environ.get(ENV_LOG_LEVEL)
    if env:
        try:
            return _parse_level(env)
        except ValueError:
            return _current_log_level
    return _current_log_level
