"""
fargin - keeps a project's goals and progress markers on disk so an
LLM-assisted workflow does not lose track of what the project is for.

Version: 0.1.0
"""

__version__ = '0.1.0'

from .core.project import ProjectConfig, ProgressMarker
from .core.store import ConfigStore
from .core.validator import Finding, Severity, Validator
from .core.progress import ProgressEngine, ProgressSummary, Suggestion

__all__ = [
    'ProjectConfig',
    'ProgressMarker',
    'ConfigStore',
    'Finding',
    'Severity',
    'Validator',
    'ProgressEngine',
    'ProgressSummary',
    'Suggestion',
]
