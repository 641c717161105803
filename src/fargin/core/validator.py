"""Validation of a project directory against the configuration model."""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union

from .project import ProjectConfig
from .store import ConfigStore
from ..utils.exceptions import CorruptConfigError, FileOperationError, NotFoundError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class Severity(str, Enum):
    """Finding severity."""
    ERROR = 'error'
    WARNING = 'warning'

    def __str__(self):
        return self.value


@dataclass
class Finding:
    """Validation finding."""
    severity: Severity
    message: str
    context: Optional[Dict] = None

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR


@dataclass
class ValidationResult:
    """Findings of one validation run, in rule order."""
    findings: List[Finding] = field(default_factory=list)

    @property
    def errors(self) -> List[Finding]:
        return [f for f in self.findings if f.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[Finding]:
        return [f for f in self.findings if f.severity == Severity.WARNING]

    @property
    def is_valid(self) -> bool:
        return not self.has_errors()

    def has_errors(self) -> bool:
        """Check if there are any errors."""
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        """Check if there are any warnings."""
        return len(self.warnings) > 0


class Validator:
    """Validator for project directories and configurations."""

    @staticmethod
    def validate(project_root: Union[str, Path]) -> List[Finding]:
        """
        Validate a project directory.

        Rules, evaluated in this order:
        1. Configuration exists and parses (stops here otherwise)
        2. Project name is not empty
        3. At least one goal is defined
        4. Marker completed_at is set iff the marker is completed
        5. Marker names are unique
        6. Scaffold subdirectories exist

        Never modifies the project.
        """
        store = ConfigStore(project_root)

        try:
            config = store.load()
        except (NotFoundError, CorruptConfigError, FileOperationError) as e:
            logger.debug(f"Validation stopped, configuration unusable: {e}")
            return [Finding(
                severity=Severity.ERROR,
                message=f"Missing or corrupt configuration: {e}",
                context={'path': str(store.config_path)}
            )]

        findings = Validator.validate_config(config)
        findings.extend(Validator.check_scaffold(project_root))
        return findings

    @staticmethod
    def validate_config(config: ProjectConfig) -> List[Finding]:
        """Run the model rules (name, goals, marker state, duplicates)."""
        findings = []

        if not config.name or not config.name.strip():
            findings.append(Finding(
                severity=Severity.ERROR,
                message="Project name must not be empty"
            ))

        if not config.goals:
            findings.append(Finding(
                severity=Severity.WARNING,
                message="No goals defined",
                context={'project': config.name}
            ))

        for index, marker in enumerate(config.progress_markers):
            if not marker.is_consistent():
                if marker.completed:
                    detail = "completed but has no completion time"
                else:
                    detail = "not completed but has a completion time"
                findings.append(Finding(
                    severity=Severity.ERROR,
                    message=f"Inconsistent marker state: '{marker.name}' is {detail}",
                    context={'marker': marker.name, 'index': index}
                ))

        # One warning per repeated occurrence, first occurrence excluded
        seen: Counter = Counter()
        for index, marker in enumerate(config.progress_markers):
            seen[marker.name] += 1
            if seen[marker.name] > 1:
                findings.append(Finding(
                    severity=Severity.WARNING,
                    message=f"Duplicate marker name: '{marker.name}'",
                    context={'marker': marker.name, 'index': index}
                ))

        return findings

    @staticmethod
    def check_scaffold(project_root: Union[str, Path]) -> List[Finding]:
        """Warn about each missing scaffold subdirectory."""
        store = ConfigStore(project_root)
        return [
            Finding(
                severity=Severity.WARNING,
                message=f"Missing directory: {path.relative_to(store.project_root)}",
                context={'path': str(path)}
            )
            for path in store.missing_scaffold()
        ]
