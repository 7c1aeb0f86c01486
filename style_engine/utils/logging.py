"""
Logging helpers for the style engine.
"""

import logging
import os
import sys
import time
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from style_engine.errors import ParseError

LOGGER_NAME = "style_engine"

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL
}


class LogFormatter(logging.Formatter):
    """Log formatter that colours the level name on terminals."""

    RESET = '\033[0m'

    LEVEL_COLORS = {
        'DEBUG': '\033[34m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[31m\033[1m'
    }

    def __init__(self, colored: bool = True, *args, **kwargs):
        """
        Initialize formatter.

        Args:
            colored: Whether to use colored output
            *args: Additional formatter args
            **kwargs: Additional formatter kwargs
        """
        self.colored = colored and sys.platform != 'win32'
        super().__init__(*args, **kwargs)

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a record, colouring only the first occurrence of its level name.

        Args:
            record: Log record to format

        Returns:
            str: Formatted log message
        """
        formatted_msg = super().format(record)

        if self.colored and record.levelname in self.LEVEL_COLORS:
            colored_level = f"{self.LEVEL_COLORS[record.levelname]}{record.levelname}{self.RESET}"
            formatted_msg = formatted_msg.replace(record.levelname, colored_level, 1)

        return formatted_msg


def setup_logging(log_file: Optional[str] = None,
                  console_level: str = "WARNING",
                  file_level: str = "DEBUG",
                  component: Optional[str] = None) -> logging.Logger:
    """
    Set up logging for the style engine.

    The console handler is installed by the first call only, and its level
    stays as that call set it. Each distinct ``log_file`` gets its own file
    handler, so a later call can still add a log file. The logger level is
    lowered as needed so every handler receives the records it accepts.

    Args:
        log_file: Path to log file (None for no file logging)
        console_level: Console logging level
        file_level: File logging level
        component: Optional component name for the logger

    Returns:
        logging.Logger: Configured logger
    """
    logger_name = LOGGER_NAME
    if component:
        logger_name = f"{logger_name}.{component}"

    logger = logging.getLogger(logger_name)

    if not any(not isinstance(handler, logging.NullHandler) for handler in logger.handlers):
        console = LOG_LEVELS.get(console_level.upper(), logging.WARNING)
        logger.setLevel(console)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(console)
        console_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        console_handler.setFormatter(LogFormatter(colored=True, fmt=console_format, datefmt='%H:%M:%S'))
        logger.addHandler(console_handler)

    if log_file and not _has_file_handler(logger, log_file):
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file = LOG_LEVELS.get(file_level.upper(), logging.DEBUG)
        if logger.level == logging.NOTSET or file < logger.level:
            logger.setLevel(file)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(file)
        file_format = ("%(asctime)s [%(levelname)s] %(name)s "
                       "(%(filename)s:%(lineno)d): %(message)s")
        file_handler.setFormatter(logging.Formatter(file_format, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    return logger


def _has_file_handler(logger: logging.Logger, log_file: str) -> bool:
    path = os.path.abspath(log_file)
    return any(isinstance(handler, logging.FileHandler) and handler.baseFilename == path
               for handler in logger.handlers)


def log_exception(logger: logging.Logger, exception: Exception,
                  message: str = "An exception occurred",
                  traceback: Optional[bool] = None) -> None:
    """
    Log an exception at ERROR level.

    A ParseError reports bad input, not a fault in the engine, and its
    message already names the offending offset. Its traceback is therefore
    only attached when the logger is enabled for DEBUG. Any other exception
    always carries its traceback.

    Args:
        logger: Logger to use
        exception: Exception to log
        message: Message to log with the exception
        traceback: Force the traceback on or off instead of deciding by type
    """
    if traceback is None:
        traceback = not isinstance(exception, ParseError) or logger.isEnabledFor(logging.DEBUG)

    exc_info = None
    if traceback:
        exc_info = (type(exception), exception, exception.__traceback__)
    logger.error(f"{message}: {exception}", exc_info=exc_info)


class PerformanceLogger:
    """Times named operations and logs their duration."""

    def __init__(self, logger: logging.Logger, component: str):
        """
        Initialize performance logger.

        Args:
            logger: Logger to use
            component: Component name used as message prefix
        """
        self.logger = logger
        self.component = component
        self.start_times: Dict[str, float] = {}

    def start(self, name: str) -> None:
        self.start_times[name] = time.perf_counter()

    def end(self, name: str, level: str = "DEBUG") -> float:
        """
        End timing an operation and log the duration.

        Args:
            name: Operation name
            level: Log level

        Returns:
            float: Duration in seconds, 0 if the operation was never started
        """
        if name not in self.start_times:
            self.logger.warning(f"No start time found for {name}")
            return 0.0

        duration = time.perf_counter() - self.start_times.pop(name)
        self.log(name, duration, level)
        return duration

    def log(self, name: str, duration: float, level: str = "DEBUG") -> None:
        log_func = getattr(self.logger, level.lower())
        log_func(f"{self.component} {name} took {duration:.4f} seconds")

    @contextmanager
    def measure(self, name: str, level: str = "DEBUG") -> Iterator[None]:
        """Time the body of a ``with`` block as operation ``name``."""
        self.start(name)
        try:
            yield
        finally:
            self.end(name, level)
