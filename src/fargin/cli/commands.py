"""CLI commands implementation using click."""

import sys

import click

from .. import __version__
from ..core.progress import ProgressEngine, SuggestionCategory
from ..core.settings import get_settings, settings_path
from ..core.store import ConfigStore
from ..core.validator import ValidationResult, Validator
from ..utils.error_handling import handle_cli_errors
from ..utils.logger import setup_logger
from .formatters import OUTPUT_FORMATS, Formatter

DEFAULT_DESCRIPTION = "A new LLM-driven project"


# Global options
@click.group()
@click.version_option(version=__version__, prog_name='fargin')
@click.option('-C', '--path', 'project_root', type=click.Path(file_okay=False),
              default='.', show_default=True, help='Project root directory')
@click.option('-v', '--verbose', is_flag=True, help='Verbose output')
@click.option('-q', '--quiet', is_flag=True, help='Quiet mode')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.pass_context
def cli(ctx, project_root, verbose, quiet, no_color):
    """fargin - keep track of a project's goals and progress."""
    ctx.ensure_object(dict)
    settings = get_settings()

    no_color = no_color or bool(settings.get_with_default('output.no_color'))

    # Setup logger
    if verbose:
        log_level = 'DEBUG'
    elif quiet:
        log_level = 'ERROR'
    else:
        log_level = settings.get_with_default('logging.level')

    ctx.obj['logger'] = setup_logger(
        level=log_level,
        log_to_console=not quiet,
        log_to_file=bool(settings.get_with_default('logging.log_to_file')),
        log_dir=settings.get_with_default('logging.directory')
    )
    ctx.obj['logger'].debug(f"Settings from {settings_path()}: {settings.to_dict()}")
    ctx.obj['settings'] = settings
    ctx.obj['store'] = ConfigStore(project_root)
    ctx.obj['formatter'] = Formatter(no_color=no_color)


# =====================
# init command
# =====================
@cli.command()
@click.option('--name', type=str, help='Project name (default: directory name)')
@click.option('--description', type=str, default=DEFAULT_DESCRIPTION, help='Project description')
@click.pass_context
@handle_cli_errors
def init(ctx, name, description):
    """Initialize fargin in the project directory."""
    store: ConfigStore = ctx.obj['store']
    formatter: Formatter = ctx.obj['formatter']

    if name is None:
        name = store.project_root.resolve().name

    config = store.init(name, description)
    formatter.print_success(f"Project '{config.name}' initialized at {store.config_dir}")
    formatter.print_info(f"Config file: {store.config_path}")
    for path in store.scaffold_paths:
        formatter.print_info(f"Created directory: {path}")


# =====================
# validate command
# =====================
@cli.command()
@click.pass_context
@handle_cli_errors
def validate(ctx):
    """Validate the project configuration and scaffold."""
    store: ConfigStore = ctx.obj['store']
    formatter: Formatter = ctx.obj['formatter']

    result = ValidationResult(Validator.validate(store.project_root))
    formatter.print_validation_result(result)

    if result.has_errors():
        sys.exit(1)


# =====================
# progress command
# =====================
@cli.command()
@click.pass_context
@handle_cli_errors
def progress(ctx):
    """Show completion of progress markers."""
    store: ConfigStore = ctx.obj['store']
    formatter: Formatter = ctx.obj['formatter']

    config = store.load()
    formatter.print_progress_report(ProgressEngine.report(config))


# =====================
# suggest command
# =====================
@cli.command()
@click.option('-n', '--limit', type=click.IntRange(min=1), help='Maximum number of suggestions')
@click.option('-f', '--format', 'output_format', type=click.Choice(OUTPUT_FORMATS),
              default='text', show_default=True, help='Output format')
@click.option('-c', '--category', type=click.Choice([c.value for c in SuggestionCategory]),
              help='Only suggestions of this category')
@click.option('--brief', is_flag=True, help='Only high priority suggestions')
@click.pass_context
@handle_cli_errors
def suggest(ctx, limit, output_format, category, brief):
    """Suggest next steps from goals and markers."""
    store: ConfigStore = ctx.obj['store']
    formatter: Formatter = ctx.obj['formatter']

    if limit is None:
        limit = int(ctx.obj['settings'].get_with_default('suggest.limit'))

    config = store.load()
    suggestions = list(ProgressEngine.suggest(config, limit=limit, category=category, brief=brief))
    formatter.print_suggestions(suggestions, output_format)


# =====================
# reset command
# =====================
@cli.command()
@click.option('-y', '--yes', is_flag=True, help='Skip confirmation')
@click.pass_context
@handle_cli_errors
def reset(ctx, yes):
    """Remove all fargin files from the project."""
    store: ConfigStore = ctx.obj['store']
    formatter: Formatter = ctx.obj['formatter']

    if not store.config_dir.exists():
        formatter.print_info("No fargin configuration found in the specified directory")
        return

    if not yes:
        confirmed = click.confirm(
            "This will remove all fargin related files and directories. Are you sure?",
            default=False
        )
        if not confirmed:
            formatter.print_info("Reset cancelled")
            return

    store.reset()
    formatter.print_success("Successfully reset fargin configuration")


# =====================
# goal commands
# =====================
@cli.group()
@click.pass_context
def goal(ctx):
    """Manage project goals."""
    pass


@goal.command('add')
@click.argument('text')
@click.pass_context
@handle_cli_errors
def goal_add(ctx, text):
    """Append a goal."""
    store: ConfigStore = ctx.obj['store']
    formatter: Formatter = ctx.obj['formatter']

    config = store.load()
    config.add_goal(text)
    store.save(config)
    formatter.print_success(f"Goal added: {text}")


@goal.command('list')
@click.pass_context
@handle_cli_errors
def goal_list(ctx):
    """List goals in priority order."""
    store: ConfigStore = ctx.obj['store']
    formatter: Formatter = ctx.obj['formatter']

    formatter.print_goals(store.load().get_goals())


# =====================
# marker commands
# =====================
@cli.group()
@click.pass_context
def marker(ctx):
    """Manage progress markers."""
    pass


@marker.command('add')
@click.argument('name')
@click.option('-d', '--description', type=str, default='', help='Marker description')
@click.pass_context
@handle_cli_errors
def marker_add(ctx, name, description):
    """Add a progress marker."""
    store: ConfigStore = ctx.obj['store']
    formatter: Formatter = ctx.obj['formatter']

    config = store.load()
    if config.find_marker(name) is not None:
        formatter.print_warning(f"A marker named '{name}' already exists")
    config.add_marker(name, description)
    store.save(config)
    formatter.print_success(f"Marker '{name}' added")


@marker.command('complete')
@click.argument('name')
@click.pass_context
@handle_cli_errors
def marker_complete(ctx, name):
    """Mark a progress marker as completed."""
    store: ConfigStore = ctx.obj['store']
    formatter: Formatter = ctx.obj['formatter']

    config = store.load()
    if config.complete_marker(name):
        store.save(config)
        formatter.print_success(f"Marker '{name}' completed")
    else:
        formatter.print_info(f"Marker '{name}' was already completed")


def main():
    """Console script entry point."""
    cli(obj={})
