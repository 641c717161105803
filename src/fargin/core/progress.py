"""Progress statistics and rule-based next-step suggestions."""

from dataclasses import dataclass, field
from enum import Enum
from itertools import islice
from typing import Any, Dict, Iterator, List, Optional

from .project import ProgressMarker, ProjectConfig

DEFAULT_SUGGESTION_LIMIT = 5


class SuggestionCategory(str, Enum):
    """Suggestion category enumeration."""
    PLANNING = 'planning'
    PROGRESS = 'progress'

    def __str__(self):
        return self.value


class SuggestionPriority(str, Enum):
    """Suggestion priority enumeration."""
    HIGH = 'high'
    MEDIUM = 'medium'
    LOW = 'low'

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Suggestion:
    """A recommended next action derived from project state."""
    message: str
    category: SuggestionCategory
    priority: SuggestionPriority
    details: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'message': self.message,
            'category': str(self.category),
            'priority': str(self.priority),
            'details': self.details
        }


@dataclass(frozen=True)
class ProgressSummary:
    """Marker completion statistics."""
    total: int
    completed: int
    percent: float

    def to_dict(self) -> Dict[str, Any]:
        return {'total': self.total, 'completed': self.completed, 'percent': self.percent}


@dataclass
class ProgressReport:
    """Snapshot of a project's progress for display."""
    project_name: str
    updated_at: Optional[str]
    summary: ProgressSummary
    markers: List[ProgressMarker] = field(default_factory=list)


class Suggestions:
    """
    Lazy, finite sequence of suggestions for one config.

    Every iteration re-derives the suggestions from the config, so the
    sequence can be walked any number of times. Filters apply before the
    limit: a category keeps only that category, brief keeps only high
    priority suggestions.
    """

    def __init__(
        self,
        config: ProjectConfig,
        limit: int = DEFAULT_SUGGESTION_LIMIT,
        category: Optional[SuggestionCategory] = None,
        brief: bool = False
    ):
        self._config = config
        self.limit = max(0, limit)
        self.category = SuggestionCategory(category) if category is not None else None
        self.brief = brief

    def _accepts(self, suggestion: Suggestion) -> bool:
        if self.category is not None and suggestion.category != self.category:
            return False
        if self.brief and suggestion.priority != SuggestionPriority.HIGH:
            return False
        return True

    def __iter__(self) -> Iterator[Suggestion]:
        matching = filter(self._accepts, ProgressEngine.iter_suggestions(self._config))
        return islice(matching, self.limit)

    def __repr__(self) -> str:
        return (
            f"Suggestions({self._config.name!r}, limit={self.limit}, "
            f"category={self.category}, brief={self.brief})"
        )


class ProgressEngine:
    """Derived computations over a ProjectConfig. Never mutates it."""

    @staticmethod
    def summarize(config: ProjectConfig) -> ProgressSummary:
        """Count markers; percent is 0.0 when there are none."""
        total = len(config.progress_markers)
        completed = sum(1 for m in config.progress_markers if m.completed)
        percent = (completed / total) * 100 if total else 0.0
        return ProgressSummary(total=total, completed=completed, percent=float(percent))

    @staticmethod
    def report(config: ProjectConfig) -> ProgressReport:
        """Build a progress report with copies of all markers."""
        return ProgressReport(
            project_name=config.name,
            updated_at=config.updated_at,
            summary=ProgressEngine.summarize(config),
            markers=config.get_markers()
        )

    @staticmethod
    def iter_suggestions(config: ProjectConfig) -> Iterator[Suggestion]:
        """
        Yield every suggestion, in rule order.

        1. No goals: define at least one goal
        2. Each incomplete marker in creation order: complete it
        3. All markers completed and goals present: define new goals
        """
        if not config.goals:
            yield Suggestion(
                message="define at least one goal",
                category=SuggestionCategory.PLANNING,
                priority=SuggestionPriority.HIGH,
                details="Add clear, measurable goals to guide project development"
            )

        all_completed = True
        for marker in config.progress_markers:
            if marker.completed:
                continue
            all_completed = False
            yield Suggestion(
                message=f"complete marker: {marker.name}",
                category=SuggestionCategory.PROGRESS,
                priority=SuggestionPriority.MEDIUM,
                details=marker.description or None
            )

        if all_completed and config.goals:
            yield Suggestion(
                message="define new goals / milestones",
                category=SuggestionCategory.PLANNING,
                priority=SuggestionPriority.LOW,
                details="Every progress marker is complete"
            )

    @staticmethod
    def suggest(
        config: ProjectConfig,
        limit: int = DEFAULT_SUGGESTION_LIMIT,
        category: Optional[SuggestionCategory] = None,
        brief: bool = False
    ) -> Suggestions:
        """Get up to `limit` matching suggestions as a restartable sequence."""
        return Suggestions(config, limit, category=category, brief=brief)
