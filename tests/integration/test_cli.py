"""Integration tests for the fargin command line."""
import json
import logging

import pytest
from click.testing import CliRunner

from fargin import __version__
from fargin.cli.commands import cli
from fargin.core.store import ConfigStore


@pytest.fixture(autouse=True)
def release_cli_logger():
    """Drop handlers bound to the runner's streams after each invocation."""
    yield
    logger = logging.getLogger('fargin')
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, project_root):
    """Run the CLI against the temporary project root."""
    def _invoke(*args, **kwargs):
        return runner.invoke(cli, ['-C', str(project_root), *args], obj={}, **kwargs)
    return _invoke


@pytest.fixture
def initialized(invoke):
    result = invoke('init', '--name', 'Demo')
    assert result.exit_code == 0, result.output
    return invoke


class TestGlobalOptions:
    """Tests for group-level options."""

    def test_version(self, runner):
        """--version prints the package version."""
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_verbose_logs_settings(self, invoke, isolated_settings_file):
        """-v logs the effective settings at debug level."""
        result = invoke('-v', 'goal', 'list')

        assert "Settings from" in result.output
        assert str(isolated_settings_file) in result.output
        assert "'limit': 5" in result.output

    def test_help_lists_commands(self, runner):
        """--help lists every command."""
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        for name in ['init', 'validate', 'progress', 'suggest', 'reset', 'goal', 'marker']:
            assert name in result.output


class TestInit:
    """Tests for the init command."""

    def test_init_creates_layout(self, invoke, project_root):
        """init writes config and scaffold directories."""
        result = invoke('init', '--name', 'Demo')

        assert result.exit_code == 0, result.output
        assert "Project 'Demo' initialized" in result.output
        assert (project_root / '.fargin' / 'config.yaml').is_file()
        for name in ['prompts', 'history', 'templates']:
            assert (project_root / '.fargin' / name).is_dir()

    def test_init_defaults(self, invoke, project_root):
        """Name defaults to the directory name, description to the stock text."""
        result = invoke('init')

        assert result.exit_code == 0, result.output
        config = ConfigStore(project_root).load()
        assert config.name == project_root.name
        assert config.description == "A new LLM-driven project"

    def test_init_twice_fails(self, initialized, project_root):
        """Second init exits with the already-exists code and leaves the file alone."""
        config_path = project_root / '.fargin' / 'config.yaml'
        before = config_path.read_bytes()

        result = initialized('init', '--name', 'Other')

        assert result.exit_code == 4
        assert "already initialized" in result.output
        assert config_path.read_bytes() == before

    def test_init_blank_name(self, invoke, project_root):
        """Blank names are rejected before anything is written."""
        result = invoke('init', '--name', '  ')

        assert result.exit_code == 2
        assert not (project_root / '.fargin').exists()


class TestValidate:
    """Tests for the validate command."""

    def test_fresh_project_passes_with_warning(self, initialized):
        """A fresh project has no errors, only the missing-goals warning."""
        result = initialized('validate')

        assert result.exit_code == 0, result.output
        assert "Validation passed!" in result.output
        assert "No goals defined" in result.output

    def test_missing_config_fails(self, invoke):
        """Without a config, validation reports one error and exits 1."""
        result = invoke('validate')

        assert result.exit_code == 1
        assert "Missing or corrupt configuration" in result.output

    def test_corrupt_config_fails(self, initialized, project_root):
        """Malformed YAML is reported as an error."""
        (project_root / '.fargin' / 'config.yaml').write_text("metadata: [", encoding='utf-8')

        result = initialized('validate')

        assert result.exit_code == 1
        assert "Missing or corrupt configuration" in result.output

    def test_missing_scaffold_warns(self, initialized, project_root):
        """Removed scaffold directories are warnings."""
        (project_root / '.fargin' / 'history').rmdir()

        result = initialized('validate')

        assert result.exit_code == 0
        assert "Missing directory: .fargin/history" in result.output


class TestProgress:
    """Tests for the progress command."""

    def test_progress_report(self, initialized):
        """Report shows completion ratio and marker names."""
        initialized('marker', 'add', 'design')
        initialized('marker', 'add', 'build')
        initialized('marker', 'complete', 'design')

        result = initialized('progress')

        assert result.exit_code == 0, result.output
        assert "Progress Report" in result.output
        assert "1/2 (50.0%)" in result.output
        assert "design" in result.output
        assert "build" in result.output

    def test_progress_without_markers(self, initialized):
        """No markers gives an explicit message."""
        result = initialized('progress')

        assert result.exit_code == 0
        assert "No progress markers defined" in result.output

    def test_progress_not_initialized(self, invoke):
        """Missing config exits with the not-found code."""
        result = invoke('progress')
        assert result.exit_code == 3

    def test_progress_undecodable_config(self, initialized, project_root):
        """Invalid UTF-8 exits with the corrupt-config code."""
        (project_root / '.fargin' / 'config.yaml').write_bytes(b"metadata:\n  name: \xff\xfe\n")

        result = initialized('progress')

        assert result.exit_code == 5
        assert "[ERROR]" in result.output


class TestSuggest:
    """Tests for the suggest command."""

    def test_text_output(self, initialized):
        """Text output lists suggestions in rule order."""
        initialized('marker', 'add', 'design', '-d', 'Design the data model')

        result = initialized('suggest')

        assert result.exit_code == 0, result.output
        assert "Suggested Next Steps" in result.output
        goal_pos = result.output.index("define at least one goal")
        marker_pos = result.output.index("complete marker: design")
        assert goal_pos < marker_pos
        assert "Design the data model" in result.output

    def test_json_output(self, initialized):
        """JSON output is a parseable array of suggestion objects."""
        initialized('goal', 'add', 'Ship v1')
        initialized('marker', 'add', 'design')

        result = initialized('suggest', '--format', 'json')

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data == [{
            'message': 'complete marker: design',
            'category': 'progress',
            'priority': 'medium',
            'details': None
        }]

    def test_markdown_output(self, initialized):
        """Markdown output has one section per suggestion."""
        result = initialized('suggest', '-f', 'markdown')

        assert result.exit_code == 0, result.output
        assert "## Suggestion 1: define at least one goal" in result.output
        assert "**Category:** planning" in result.output
        assert "**Priority:** high" in result.output

    def test_all_done_suggests_new_goals(self, initialized):
        """Goals with every marker complete suggest new milestones."""
        initialized('goal', 'add', 'Ship v1')
        initialized('marker', 'add', 'design')
        initialized('marker', 'complete', 'design')

        result = initialized('suggest', '-f', 'json')

        data = json.loads(result.output)
        assert [s['message'] for s in data] == ["define new goals / milestones"]

    def test_limit_option(self, initialized):
        """--limit caps the number of suggestions."""
        for name in ['a', 'b', 'c']:
            initialized('marker', 'add', name)

        result = initialized('suggest', '-n', '2', '-f', 'json')

        assert len(json.loads(result.output)) == 2

    def test_limit_from_settings(self, temp_settings, initialized):
        """Without --limit the settings value applies."""
        for name in ['a', 'b', 'c', 'd']:
            initialized('marker', 'add', name)

        result = initialized('suggest', '-f', 'json')

        assert len(json.loads(result.output)) == temp_settings['suggest']['limit']

    def test_category_option(self, initialized):
        """--category keeps one kind of suggestion."""
        initialized('marker', 'add', 'design')

        result = initialized('suggest', '--category', 'progress', '-f', 'json')

        assert result.exit_code == 0, result.output
        assert [s['message'] for s in json.loads(result.output)] == ["complete marker: design"]

    def test_brief_option(self, initialized):
        """--brief keeps only high priority suggestions."""
        initialized('marker', 'add', 'design')

        result = initialized('suggest', '--brief', '-f', 'json')

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert [s['priority'] for s in data] == ['high']

    def test_unknown_category_rejected(self, initialized):
        """Unknown categories are usage errors."""
        result = initialized('suggest', '--category', 'testing')
        assert result.exit_code == 2

    def test_zero_limit_rejected(self, initialized):
        """Limits below one are usage errors."""
        result = initialized('suggest', '-n', '0')
        assert result.exit_code != 0


class TestReset:
    """Tests for the reset command."""

    def test_reset_with_yes(self, initialized, project_root):
        """--yes removes the configuration directory."""
        result = initialized('reset', '--yes')

        assert result.exit_code == 0, result.output
        assert "Successfully reset fargin configuration" in result.output
        assert not (project_root / '.fargin').exists()

    def test_reset_confirm_declined(self, initialized, project_root):
        """Declining the prompt keeps everything."""
        result = initialized('reset', input='n\n')

        assert result.exit_code == 0
        assert "Reset cancelled" in result.output
        assert (project_root / '.fargin' / 'config.yaml').is_file()

    def test_reset_confirm_accepted(self, initialized, project_root):
        """Accepting the prompt removes the directory."""
        result = initialized('reset', input='y\n')

        assert result.exit_code == 0
        assert not (project_root / '.fargin').exists()

    def test_reset_without_project(self, invoke):
        """Reset on a bare directory is a no-op."""
        result = invoke('reset', '--yes')

        assert result.exit_code == 0
        assert "No fargin configuration found" in result.output

    def test_init_after_reset(self, initialized):
        """A reset project can be initialized again."""
        initialized('reset', '--yes')
        result = initialized('init', '--name', 'Again')
        assert result.exit_code == 0, result.output


class TestGoals:
    """Tests for goal subcommands."""

    def test_add_and_list(self, initialized):
        """Goals are listed in insertion order."""
        initialized('goal', 'add', 'Ship v1')
        initialized('goal', 'add', 'Write docs')

        result = initialized('goal', 'list')

        assert result.exit_code == 0
        assert "1. Ship v1" in result.output
        assert "2. Write docs" in result.output

    def test_list_empty(self, initialized):
        result = initialized('goal', 'list')
        assert "No goals defined" in result.output

    def test_add_blank_goal(self, initialized):
        """Blank goals exit with the invalid-input code."""
        result = initialized('goal', 'add', '   ')
        assert result.exit_code == 2


class TestMarkers:
    """Tests for marker subcommands."""

    def test_add_and_complete(self, initialized, project_root):
        """Completing a marker records a completion time."""
        initialized('marker', 'add', 'design', '--description', 'Design it')

        result = initialized('marker', 'complete', 'design')

        assert result.exit_code == 0, result.output
        assert "Marker 'design' completed" in result.output
        marker = ConfigStore(project_root).load().find_marker('design')
        assert marker.completed is True
        assert marker.completed_at is not None
        assert marker.description == 'Design it'

    def test_complete_twice(self, initialized):
        """Completing again is reported, not an error."""
        initialized('marker', 'add', 'design')
        initialized('marker', 'complete', 'design')

        result = initialized('marker', 'complete', 'design')

        assert result.exit_code == 0
        assert "already completed" in result.output

    def test_complete_missing_marker(self, initialized):
        """Unknown markers exit with the not-found code."""
        result = initialized('marker', 'complete', 'nope')

        assert result.exit_code == 3
        assert "nope" in result.output

    def test_duplicate_marker_warns(self, initialized, project_root):
        """Duplicate names are allowed with a warning."""
        initialized('marker', 'add', 'design')
        result = initialized('marker', 'add', 'design')

        assert result.exit_code == 0
        assert "already exists" in result.output
        assert len(ConfigStore(project_root).load().progress_markers) == 2
