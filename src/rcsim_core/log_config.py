# --- src/rcsim_core/log_config.py ---
import logging
import sys
from typing import Optional, TextIO, Union

PACKAGE_LOGGER_NAME = "rcsim_core"
LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Attaches one console handler to the `rcsim_core` package logger.

    Only the package logger is configured, so an application's own root
    logging setup is left alone. Calling this again replaces the handler
    rather than adding a second one.

    Args:
        level: A logging level, either numeric or a name such as "DEBUG".
        stream: Where records are written. Defaults to stdout.

    Returns:
        The configured package logger.

    Raises:
        ValueError: if `level` is a name logging does not know.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown logging level '{level}'.")
        level = resolved

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.setLevel(level)
    package_logger.addHandler(console_handler)
    package_logger.debug(f"Logging configured at level {logging.getLevelName(level)}.")
    return package_logger
