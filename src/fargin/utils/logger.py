"""Logging setup for fargin.

Every module logs through a child of the ``fargin`` logger; the CLI calls
setup_logger once per invocation to attach handlers.
"""

import logging
import sys
from pathlib import Path
from typing import IO, Optional, Union

CONSOLE_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'
CONSOLE_DATEFMT = '%H:%M:%S'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_DATEFMT = '%Y-%m-%d %H:%M:%S'

LEVEL_COLORS = {
    logging.DEBUG: '\033[36m',
    logging.INFO: '\033[32m',
    logging.WARNING: '\033[33m',
    logging.ERROR: '\033[31m',
    logging.CRITICAL: '\033[35m',
}
RESET = '\033[0m'


class ColoredFormatter(logging.Formatter):
    """Colors the level name when the target stream is a terminal."""

    def __init__(self, fmt=None, datefmt=None, stream: Optional[IO] = None):
        super().__init__(fmt, datefmt)
        self.stream = stream

    def _use_color(self) -> bool:
        stream = self.stream if self.stream is not None else sys.stderr
        isatty = getattr(stream, 'isatty', None)
        return bool(isatty and isatty())

    def format(self, record):
        color = LEVEL_COLORS.get(record.levelno)
        if color and self._use_color():
            # Copy so other handlers see the plain level name
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{color}{record.levelname}{RESET}"
        return super().format(record)


def parse_level(level: Union[int, str]) -> int:
    """Turn a level name such as 'debug' into its logging constant."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.WARNING


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, CONSOLE_DATEFMT, stream=handler.stream))
    return handler


def _file_handler(log_dir: Union[str, Path], name: str, level: int) -> logging.Handler:
    log_path = Path(log_dir).expanduser()
    log_path.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path / f'{name}.log', encoding='utf-8')
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, FILE_DATEFMT))
    return handler


def setup_logger(
    name: str = 'fargin',
    log_dir: Optional[str] = None,
    level: Union[int, str] = logging.WARNING,
    log_to_file: bool = False,
    log_to_console: bool = True
) -> logging.Logger:
    """
    Configure the named logger, replacing any handlers from an earlier call.

    Args:
        name: Logger name
        log_dir: Directory for <name>.log (file logging needs it)
        level: Logging level, as constant or name
        log_to_file: Enable file logging
        log_to_console: Enable stderr logging

    Returns:
        Configured logger instance
    """
    level = parse_level(level)
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_to_console:
        logger.addHandler(_console_handler(level))
    if log_to_file and log_dir:
        logger.addHandler(_file_handler(log_dir, name, level))

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def get_logger(name: str = 'fargin') -> logging.Logger:
    """Get a logger; module loggers use __name__."""
    return logging.getLogger(name)
