"""Project configuration model: goals and progress markers."""

import datetime as dt
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from ..utils.exceptions import CorruptConfigError, InvalidInputError, NotFoundError
from ..utils.helpers import get_timestamp, parse_timestamp
from ..utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_VERSION = '1.0.0'


def _is_blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


def _require(data: Dict[str, Any], key: str, types: Tuple[type, ...], where: str) -> Any:
    """Fetch a required key, raising CorruptConfigError when absent or mistyped."""
    if not isinstance(data, dict) or key not in data:
        raise CorruptConfigError(f"Missing required field '{where}.{key}'")
    value = data[key]
    if not isinstance(value, types):
        raise CorruptConfigError(
            f"Field '{where}.{key}' has type {type(value).__name__}, "
            f"expected {' or '.join(t.__name__ for t in types)}"
        )
    return value


def _optional(data: Dict[str, Any], key: str, types: Tuple[type, ...], where: str, default: Any) -> Any:
    value = data.get(key, default)
    if value is None:
        return default
    if not isinstance(value, types):
        raise CorruptConfigError(
            f"Field '{where}.{key}' has type {type(value).__name__}, "
            f"expected {' or '.join(t.__name__ for t in types)}"
        )
    return value


def _as_timestamp(value: Any) -> Optional[str]:
    # Hand-edited files may hold unquoted timestamps, which YAML parses to datetime
    if isinstance(value, dt.datetime):
        return value.isoformat(timespec='microseconds')
    return value


@dataclass
class ProgressMarker:
    """
    A named, completable unit of work tracked against a project.

    Schema:
        name: string
        description: string
        completed: boolean
        completed_at: ISO-8601 | null
    """

    name: str
    description: str = ""
    completed: bool = False
    completed_at: Optional[str] = None

    def complete(self) -> bool:
        """Mark as completed. Returns False if it already was."""
        if self.completed:
            return False
        self.completed = True
        self.completed_at = get_timestamp()
        return True

    def is_consistent(self) -> bool:
        """completed_at is set if and only if the marker is completed."""
        return self.completed == (self.completed_at is not None)

    def to_dict(self) -> Dict[str, Any]:
        """Convert marker to dictionary following schema."""
        return {
            'name': self.name,
            'description': self.description,
            'completed': self.completed,
            'completed_at': self.completed_at
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], where: str = 'progress_markers') -> 'ProgressMarker':
        """Create marker from dictionary."""
        if not isinstance(data, dict):
            raise CorruptConfigError(f"Entry in '{where}' is not a mapping")
        return cls(
            name=_require(data, 'name', (str,), where),
            description=_optional(data, 'description', (str,), where, ''),
            completed=_require(data, 'completed', (bool,), where),
            completed_at=_as_timestamp(
                _optional(data, 'completed_at', (str, dt.datetime), where, None)
            )
        )

    def __str__(self) -> str:
        status = 'done' if self.completed else 'open'
        return f"ProgressMarker({self.name} [{status}])"


@dataclass
class ProjectConfig:
    """
    Project goals, progress markers and metadata.

    Schema:
        metadata:
          name: string
          version: semver
          created_at: ISO-8601
          updated_at: ISO-8601

        summary:
          description: string
          goals: [string]

        progress_markers:
          - ProgressMarker

    Two configs are equal when every field is equal, list order included.
    """

    name: str
    description: str = ""
    goals: List[str] = field(default_factory=list)
    progress_markers: List[ProgressMarker] = field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    version: str = SCHEMA_VERSION

    def __post_init__(self):
        """Initialize timestamps if not set."""
        if self.created_at is None:
            self.created_at = get_timestamp()
        if self.updated_at is None:
            self.updated_at = self.created_at

    @classmethod
    def new(cls, name: str, description: str = "") -> 'ProjectConfig':
        """Create a fresh project configuration."""
        if _is_blank(name):
            raise InvalidInputError("Project name must not be empty")
        return cls(name=name, description=description or "")

    def touch(self) -> None:
        """Refresh updated_at, never moving it before created_at."""
        now = get_timestamp()
        created = parse_timestamp(self.created_at) if self.created_at else None
        if created is not None and created > parse_timestamp(now):
            self.updated_at = self.created_at
        else:
            self.updated_at = now

    # Goals

    def add_goal(self, text: str) -> None:
        """Append a goal to the end of the list."""
        if _is_blank(text):
            raise InvalidInputError("Goal text must not be empty")
        self.goals.append(text)
        logger.debug(f"Goal added to project {self.name}: {text}")

    def get_goals(self) -> List[str]:
        """Get a copy of the goals."""
        return list(self.goals)

    # Markers

    def add_marker(self, name: str, description: str = "") -> ProgressMarker:
        """Append a new incomplete progress marker."""
        if _is_blank(name):
            raise InvalidInputError("Marker name must not be empty")
        marker = ProgressMarker(name=name, description=description or "")
        self.progress_markers.append(marker)
        logger.debug(f"Marker {name} added to project {self.name}")
        return replace(marker)

    def find_marker(self, name: str) -> Optional[ProgressMarker]:
        """Get a copy of the first marker with this name, in creation order."""
        index = self._marker_index(name)
        if index is None:
            return None
        return replace(self.progress_markers[index])

    def _marker_index(self, name: str) -> Optional[int]:
        for index, marker in enumerate(self.progress_markers):
            if marker.name == name:
                return index
        return None

    def complete_marker(self, name: str) -> bool:
        """
        Complete the first marker named `name`.

        Returns True when the marker changed state and False when it was
        already completed.

        Raises:
            NotFoundError: no marker has this name
        """
        index = self._marker_index(name)
        if index is None:
            raise NotFoundError(f"Progress marker '{name}' not found")

        changed = self.progress_markers[index].complete()
        if changed:
            logger.debug(f"Marker {name} completed in project {self.name}")
        return changed

    def get_markers(self) -> List[ProgressMarker]:
        """Get copies of all markers in creation order."""
        return [replace(marker) for marker in self.progress_markers]

    def incomplete_markers(self) -> List[ProgressMarker]:
        """Get copies of the markers that are still open."""
        return [replace(m) for m in self.progress_markers if not m.completed]

    # Serialization

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary following schema."""
        return {
            'metadata': {
                'name': self.name,
                'version': self.version,
                'created_at': self.created_at,
                'updated_at': self.updated_at
            },
            'summary': {
                'description': self.description,
                'goals': list(self.goals)
            },
            'progress_markers': [m.to_dict() for m in self.progress_markers]
        }

    @classmethod
    def from_dict(cls, data: Any) -> 'ProjectConfig':
        """
        Create config from dictionary.

        Raises:
            CorruptConfigError: required fields are missing or mistyped
        """
        if not isinstance(data, dict):
            raise CorruptConfigError("Configuration document is not a mapping")

        metadata = _require(data, 'metadata', (dict,), 'root')
        summary = _require(data, 'summary', (dict,), 'root')
        markers = _require(data, 'progress_markers', (list,), 'root')
        goals = _require(summary, 'goals', (list,), 'summary')

        for i, goal in enumerate(goals):
            if not isinstance(goal, str):
                raise CorruptConfigError(f"Goal #{i + 1} is not text")

        return cls(
            name=_require(metadata, 'name', (str,), 'metadata'),
            description=_optional(summary, 'description', (str,), 'summary', ''),
            goals=list(goals),
            progress_markers=[
                ProgressMarker.from_dict(m, f'progress_markers[{i}]')
                for i, m in enumerate(markers)
            ],
            created_at=_as_timestamp(
                _require(metadata, 'created_at', (str, dt.datetime), 'metadata')
            ),
            updated_at=_as_timestamp(
                _require(metadata, 'updated_at', (str, dt.datetime), 'metadata')
            ),
            version=_optional(metadata, 'version', (str,), 'metadata', SCHEMA_VERSION)
        )

    def __str__(self) -> str:
        """String representation of project."""
        return f"ProjectConfig({self.name}: {len(self.goals)} goals, {len(self.progress_markers)} markers)"
