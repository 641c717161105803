"""Error handling utilities for fargin.

Provides context managers and decorators that turn core exceptions into
process exit codes. Only the command-line layer uses these; the core
always raises.
"""
import sys
from contextlib import contextmanager
from functools import wraps
from typing import Callable, Dict, Generator, Type, TypeVar

import click

from fargin.utils.exceptions import (
    AlreadyExistsError,
    CorruptConfigError,
    FarginError,
    FileOperationError,
    InvalidInputError,
    NotFoundError,
)

F = TypeVar('F', bound=Callable)

EXIT_INTERRUPTED = 130

EXIT_CODES: Dict[Type[FarginError], int] = {
    InvalidInputError: 2,
    NotFoundError: 3,
    AlreadyExistsError: 4,
    CorruptConfigError: 5,
    FileOperationError: 6,
}


def exit_code_for(error: FarginError) -> int:
    """Return the exit code for an error, walking its class hierarchy."""
    for klass in type(error).__mro__:
        if klass in EXIT_CODES:
            return EXIT_CODES[klass]
    return 1


def report_error(msg: str) -> None:
    """Print an error message in red to stderr."""
    click.secho(f"[ERROR] {msg}", fg='red', err=True)


@contextmanager
def cli_error_handler() -> Generator[None, None, None]:
    """Context manager for CLI error handling.

    Catches FarginError exceptions and converts them to sys.exit() calls
    with the exit code of their kind.

    Usage:
        def main():
            with cli_error_handler():
                store.load()
                # ... rest of command logic
    """
    try:
        yield
    except FarginError as e:
        report_error(str(e))
        sys.exit(exit_code_for(e))
    except KeyboardInterrupt:
        click.echo("\nAborted.")
        sys.exit(EXIT_INTERRUPTED)


def handle_cli_errors(func: F) -> F:
    """Decorator for CLI command functions.

    Same behaviour as cli_error_handler, applied to a whole function.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        with cli_error_handler():
            return func(*args, **kwargs)
    return wrapper  # type: ignore
