"""Custom exceptions for fargin.

Provides a hierarchy of exceptions for consistent error handling.
"""


class FarginError(Exception):
    """Base exception for fargin.

    All custom exceptions should inherit from this class.
    """
    pass


class InvalidInputError(FarginError):
    """Error in user supplied data.

    Raised when a required field (project name, goal, marker name) is empty.
    """
    pass


class NotFoundError(FarginError):
    """Expected file or marker is absent.

    Raised when the project configuration does not exist or when a marker
    lookup has no match.
    """
    pass


class AlreadyExistsError(FarginError):
    """Project already initialized.

    Raised by init when a configuration file is present at the project root.
    """
    pass


class CorruptConfigError(FarginError):
    """Persisted configuration cannot be parsed.

    Raised on malformed YAML or when required fields are missing.
    """
    pass


class FileOperationError(FarginError):
    """Error in file operations.

    Raised when file read/write/delete operations fail.
    """
    pass
