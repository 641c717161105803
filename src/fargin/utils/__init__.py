"""Utility modules for helpers, logging and errors."""

from fargin.utils.exceptions import (
    FarginError,
    InvalidInputError,
    NotFoundError,
    AlreadyExistsError,
    CorruptConfigError,
    FileOperationError,
)
from fargin.utils.error_handling import (
    cli_error_handler,
    handle_cli_errors,
    exit_code_for,
)
from fargin.utils.helpers import load_yaml, save_yaml, get_timestamp
from fargin.utils.logger import setup_logger, get_logger

__all__ = [
    # Exceptions
    'FarginError',
    'InvalidInputError',
    'NotFoundError',
    'AlreadyExistsError',
    'CorruptConfigError',
    'FileOperationError',
    # Error handling
    'cli_error_handler',
    'handle_cli_errors',
    'exit_code_for',
    # Helpers
    'load_yaml',
    'save_yaml',
    'get_timestamp',
    # Logging
    'setup_logger',
    'get_logger',
]
