"""Logging setup for the API server and analysis scripts."""
import logging
import sys
from typing import Iterable, Optional, TextIO

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

# Per-request connection logs from the Open-Meteo client
NOISY_LOGGERS = ("urllib3", "requests")


class ColoredFormatter(logging.Formatter):
    """Formatter that colours the level name of each record."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[0;96m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    RESET = "\033[0m"

    def __init__(self, fmt: str = LOG_FORMAT, use_color: bool = True):
        super().__init__(fmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, "") if self.use_color else ""
        if not color:
            return super().format(record)

        levelname = record.levelname
        record.levelname = f"{color}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def config_logger(
    debug: bool = False,
    stream: Optional[TextIO] = None,
    quiet_loggers: Iterable[str] = NOISY_LOGGERS,
) -> logging.Handler:
    """
    Replace the root logger's handlers with a single coloured stream handler.

    Colour is only used when the stream is a terminal. HTTP client loggers
    stay at WARNING even in debug mode so site fetches do not flood the log.

    Args:
        debug: Log at DEBUG instead of INFO
        stream: Output stream (default: stderr)
        quiet_loggers: Logger names held at WARNING

    Returns:
        The installed handler
    """
    stream = stream or sys.stderr
    root = logging.getLogger()

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(ColoredFormatter(use_color=stream.isatty()))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)

    return handler
