"""Click CLI entry point."""

import os
import sys
from pathlib import Path

import click

from .classify import ProjectType
from .config import InitSettings
from .init import InitError, run_init
from .output import Reporter

# Exit codes:
# 0 = success, or skipped in development mode
# 1 = initialization failed
EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def _get_version() -> str:
    """Get version from package metadata."""
    from importlib.metadata import version

    return version("obsidian-dev-skills")


def _should_disable_color() -> bool:
    """Check if color should be disabled per NO_COLOR spec."""
    # https://no-color.org/ - disable if NO_COLOR is set (any non-empty value)
    return bool(os.environ.get("NO_COLOR"))


def _is_interactive() -> bool:
    return sys.stdin.isatty()


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=_get_version(), prog_name="obsidian-dev-skills")
@click.option(
    "--project-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project to initialize (default: found from INIT_CWD or the current directory)",
)
@click.option(
    "--type",
    "project_type",
    type=click.Choice([t.value for t in ProjectType]),
    default=None,
    help="Project type (default: detected from manifest.json and theme.css)",
)
@click.option(
    "--force",
    is_flag=True,
    help="Initialize even inside the skills repository (same as FORCE_INIT=1)",
)
@click.option("-q", "--quiet", is_flag=True, help="Suppress non-essential output")
@click.pass_context
def cli(
    ctx: click.Context,
    project_root: Path | None,
    project_type: str | None,
    force: bool,
    quiet: bool,
) -> None:
    """Install Obsidian development skills into the current project.

    Copies the skill bundles into .agent/skills (or .agents/skills), creates
    a project skill template, and updates AGENTS.md and sync-status.json.

    \b
    Examples:
      obsidian-dev-skills                      # detect project and type
      obsidian-dev-skills --type theme         # theme project, no prompt
      obsidian-dev-skills --project-root ../my-plugin
    """
    # Respect NO_COLOR environment variable
    if _should_disable_color():
        ctx.color = False

    settings = InitSettings.from_env(
        project_root=project_root.resolve() if project_root else None,
        project_type=ProjectType(project_type) if project_type else None,
        force=True if force else None,
    )
    reporter = Reporter(quiet=quiet)

    try:
        run_init(settings, reporter, interactive=_is_interactive())
    except InitError as e:
        reporter.fail(str(e))
        sys.exit(EXIT_FAILURE)
