"""Core modules: project model, persistence, validation and progress."""

from .project import ProjectConfig, ProgressMarker, SCHEMA_VERSION
from .store import ConfigStore
from .validator import Finding, Severity, ValidationResult, Validator
from .progress import (
    ProgressEngine,
    ProgressReport,
    ProgressSummary,
    Suggestion,
    SuggestionCategory,
    SuggestionPriority,
)

__all__ = [
    'ProjectConfig',
    'ProgressMarker',
    'SCHEMA_VERSION',
    'ConfigStore',
    'Finding',
    'Severity',
    'ValidationResult',
    'Validator',
    'ProgressEngine',
    'ProgressReport',
    'ProgressSummary',
    'Suggestion',
    'SuggestionCategory',
    'SuggestionPriority',
]
