"""CLI modules for command-line interface."""

from .commands import cli, main
from .formatters import Formatter

__all__ = ['cli', 'main', 'Formatter']
