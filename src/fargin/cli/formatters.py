"""Output formatters for CLI with rich formatting."""

import json
from typing import List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..core.progress import ProgressReport, ProgressSummary, Suggestion
from ..core.validator import Finding, Severity, ValidationResult
from ..utils.helpers import truncate_text

OUTPUT_FORMATS = ('text', 'json', 'markdown')


def suggestions_to_json(suggestions: Sequence[Suggestion]) -> str:
    """Serialize suggestions to a JSON array."""
    return json.dumps([s.to_dict() for s in suggestions], indent=2, ensure_ascii=False)


def suggestions_to_markdown(suggestions: Sequence[Suggestion]) -> str:
    """Serialize suggestions to Markdown sections."""
    parts = []
    for i, suggestion in enumerate(suggestions, 1):
        parts.append(f"## Suggestion {i}: {suggestion.message}\n")
        parts.append(f"**Category:** {suggestion.category}\n")
        parts.append(f"**Priority:** {suggestion.priority}\n")
        if suggestion.details:
            parts.append(f"**Details:** {suggestion.details}\n")
        parts.append("---\n")
    return "\n".join(parts)


class Formatter:
    """Output formatter for CLI."""

    def __init__(self, no_color: bool = False, console: Optional[Console] = None):
        """Initialize formatter."""
        self.no_color = no_color
        self.console = console or Console(no_color=no_color, highlight=False)

    def print_raw(self, text: str) -> None:
        """Print machine-readable text without markup processing."""
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def print_success(self, message: str) -> None:
        """Print success message."""
        self.console.print(f"✓ {escape(message)}", style="bold green", soft_wrap=True)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self.console.print(f"✗ {escape(message)}", style="bold red", soft_wrap=True)

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self.console.print(f"⚠ {escape(message)}", style="bold yellow", soft_wrap=True)

    def print_info(self, message: str) -> None:
        """Print info message."""
        self.console.print(f"ℹ {escape(message)}", style="blue", soft_wrap=True)

    def print_header(self, title: str) -> None:
        """Print section header."""
        self.console.print(f"\n[bold cyan]{escape(title)}[/bold cyan]")
        self.console.print("─" * len(title))

    def format_severity(self, severity: Severity) -> str:
        """Format finding severity with color."""
        if severity == Severity.ERROR:
            return "[bold red]ERROR[/bold red]"
        return "[yellow]WARNING[/yellow]"

    def format_priority(self, priority: str) -> str:
        """Format priority with color."""
        priority_colors = {
            'high': 'red',
            'medium': 'yellow',
            'low': 'green'
        }
        color = priority_colors.get(priority, 'white')
        return f"[{color}]{priority.upper()}[/{color}]"

    def print_findings(self, findings: List[Finding]) -> None:
        """Print findings in rule order."""
        for finding in findings:
            self.console.print(
                f"{self.format_severity(finding.severity)} {escape(finding.message)}",
                soft_wrap=True
            )

    def print_validation_result(self, result: ValidationResult) -> None:
        """Print validation result."""
        if result.is_valid:
            self.print_success("Validation passed!")
        else:
            self.print_error(f"Validation failed with {len(result.errors)} error(s)")

        self.print_findings(result.findings)

        if result.has_warnings():
            self.print_info(f"{len(result.warnings)} warning(s)")

    def print_progress_bar(self, summary: ProgressSummary, description: str = "Progress") -> None:
        """Print progress bar."""
        if summary.total == 0:
            self.print_info("No progress markers defined")
            return

        bar_length = 30
        filled = int(bar_length * summary.completed / summary.total)
        bar = "█" * filled + "░" * (bar_length - filled)
        self.console.print(
            f"{description} [{bar}] {summary.completed}/{summary.total} ({summary.percent:.1f}%)",
            style="cyan",
            markup=False,
            soft_wrap=True
        )

    def print_progress_report(self, report: ProgressReport) -> None:
        """Print progress report with marker table."""
        self.console.print(Panel(
            f"[bold cyan]{escape(report.project_name)}[/bold cyan]\n"
            f"[dim]Last updated: {escape(report.updated_at or 'N/A')}[/dim]",
            title="Progress Report",
            border_style="cyan"
        ))
        self.print_progress_bar(report.summary)

        if not report.markers:
            return

        table = Table(title="Progress Markers", box=box.ROUNDED, show_lines=False)
        table.add_column("", justify="center")
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Description", style="dim")
        table.add_column("Completed at")

        for marker in report.markers:
            table.add_row(
                "[green]✓[/green]" if marker.completed else "[red]×[/red]",
                escape(marker.name),
                escape(truncate_text(marker.description, 50)),
                escape(marker.completed_at or "-")
            )

        self.console.print(table)

    def print_goals(self, goals: List[str]) -> None:
        """Print numbered goal list."""
        if not goals:
            self.print_info("No goals defined")
            return

        self.print_header("Goals")
        for i, goal in enumerate(goals, 1):
            self.console.print(f"  {i}. {escape(goal)}", soft_wrap=True)

    def print_suggestions(self, suggestions: List[Suggestion], output_format: str = 'text') -> None:
        """Print suggestions as text, JSON or Markdown."""
        if output_format == 'json':
            self.print_raw(suggestions_to_json(suggestions))
            return

        if output_format == 'markdown':
            self.print_raw(suggestions_to_markdown(suggestions))
            return

        if not suggestions:
            self.print_success("No suggestions at this time. Project is progressing well!")
            return

        self.print_header("Suggested Next Steps")
        for i, suggestion in enumerate(suggestions, 1):
            self.console.print(
                f"{i}. {self.format_priority(str(suggestion.priority))} {escape(suggestion.message)}",
                soft_wrap=True
            )
            if suggestion.details:
                self.console.print(f"   [dim]{escape(suggestion.details)}[/dim]", soft_wrap=True)
