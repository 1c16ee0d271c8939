"""Logging setup for the dicemult package."""

import logging
import sys
from pathlib import Path

LOGGER_NAME = "dicemult"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

_COLORS = {
    logging.DEBUG: "\033[36m",      # cyan
    logging.INFO: "\033[32m",       # green
    logging.WARNING: "\033[33m",    # yellow
    logging.ERROR: "\033[31m",      # red
    logging.CRITICAL: "\033[1;31m", # bold red
}
_RESET = "\033[0m"


class ColorFormatter(logging.Formatter):
    """Wraps the level name in ANSI colour codes."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = _COLORS.get(record.levelno)
        if not color:
            return message
        return message.replace(record.levelname, f"{color}{record.levelname}{_RESET}", 1)


def setup_logging(
    level: str | int = "INFO",
    log_file: Path | None = None,
    enable_color: bool = True,
) -> logging.Logger:
    """Configure the package logger and return it.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or numeric level.
        log_file: Optional file that receives an uncoloured copy of every record.
        enable_color: Colour the level names on the console (only when it is a tty).
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    # Calling setup twice should not duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    if enable_color and sys.stderr.isatty():
        console.setFormatter(ColorFormatter(LOG_FORMAT, DATE_FORMAT))
    else:
        console.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
