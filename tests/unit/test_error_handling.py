"""Unit tests for fargin.utils.error_handling module."""
import pytest

from fargin.utils import (
    AlreadyExistsError,
    CorruptConfigError,
    FarginError,
    FileOperationError,
    InvalidInputError,
    NotFoundError,
    cli_error_handler,
    exit_code_for,
    handle_cli_errors,
)


class TestExitCodes:
    """Tests for per-kind exit codes."""

    @pytest.mark.parametrize("error, code", [
        (InvalidInputError("x"), 2),
        (NotFoundError("x"), 3),
        (AlreadyExistsError("x"), 4),
        (CorruptConfigError("x"), 5),
        (FileOperationError("x"), 6),
        (FarginError("x"), 1),
    ])
    def test_exit_code_for(self, error, code):
        """Each error kind maps to its own exit code."""
        assert exit_code_for(error) == code

    def test_subclass_uses_parent_code(self):
        """Subclasses inherit the exit code of their kind."""
        class MarkerMissing(NotFoundError):
            pass

        assert exit_code_for(MarkerMissing("x")) == 3


class TestCliErrorHandler:
    """Tests for cli_error_handler context manager."""

    def test_passes_through_normal_execution(self):
        """Normal execution passes through without issues."""
        result = []
        with cli_error_handler():
            result.append(1)
            result.append(2)
        assert result == [1, 2]

    def test_catches_fargin_error_and_exits(self, capsys):
        """Catches FarginError, prints to stderr and exits with its code."""
        with pytest.raises(SystemExit) as exc_info:
            with cli_error_handler():
                raise AlreadyExistsError("Project already initialized")

        assert exc_info.value.code == 4
        captured = capsys.readouterr()
        assert "Project already initialized" in captured.err
        assert "[ERROR]" in captured.err

    def test_catches_keyboard_interrupt(self, capsys):
        """Catches KeyboardInterrupt and exits with code 130."""
        with pytest.raises(SystemExit) as exc_info:
            with cli_error_handler():
                raise KeyboardInterrupt()

        assert exc_info.value.code == 130
        captured = capsys.readouterr()
        assert "Aborted" in captured.out

    def test_does_not_catch_other_exceptions(self):
        """Does not catch non-FarginError exceptions."""
        with pytest.raises(ValueError):
            with cli_error_handler():
                raise ValueError("Not a FarginError")


class TestHandleCliErrors:
    """Tests for handle_cli_errors decorator."""

    def test_passes_through_normal_execution(self):
        """Return values pass through."""
        @handle_cli_errors
        def add(a, b):
            return a + b

        assert add(3, 5) == 8

    def test_catches_fargin_error_and_exits(self, capsys):
        """Catches FarginError and exits with its code."""
        @handle_cli_errors
        def failing_func():
            raise CorruptConfigError("Malformed configuration")

        with pytest.raises(SystemExit) as exc_info:
            failing_func()

        assert exc_info.value.code == 5
        assert "Malformed configuration" in capsys.readouterr().err

    def test_does_not_catch_other_exceptions(self):
        """Does not catch non-FarginError exceptions."""
        @handle_cli_errors
        def bad_func():
            raise TypeError("Type error")

        with pytest.raises(TypeError):
            bad_func()

    def test_preserves_function_metadata(self):
        """Preserves __name__ and __doc__."""
        @handle_cli_errors
        def documented_func():
            """This is the docstring."""

        assert documented_func.__name__ == "documented_func"
        assert documented_func.__doc__ == "This is the docstring."
