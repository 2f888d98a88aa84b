"""Initialization run: install skills and update agent metadata in a host project."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import click

from .agents_md import sync_agents_md
from .classify import ProjectType, resolve_project_type
from .config import InitSettings
from .output import Reporter, bold, file_path_style, info
from .paths import PACKAGE_NAME, AgentPaths, find_project_root, path_is_within
from .skill import (
    PROJECT_SKILL_NAME,
    initialize_project_skill,
    install_skills,
    selected_skills,
)
from .state import record_sync


class InitError(Exception):
    """Initialization failed after it started writing to the project."""

    pass


class InitState(str, Enum):
    """Terminal state of a run that did not fail."""

    SKIP = "skip"
    DONE = "done"


@dataclass
class InitResult:
    """Outcome of a run that did not fail."""

    status: InitState
    project_root: Path
    project_type: ProjectType | None = None
    installed_skills: list[str] = field(default_factory=list)
    copied_skills: list[str] = field(default_factory=list)
    agents_md_strategy: str | None = None


def is_development(project_root: Path, package_root: Path) -> bool:
    """Check whether the run is happening inside this package's own checkout.

    Besides a project root at or below the package root, a project that
    holds the skill sources without having the package installed under
    node_modules is treated as a checkout too.
    """
    if path_is_within(project_root, package_root):
        return True

    has_skill_sources = (project_root / "obsidian_dev_skills" / "skills").is_dir()
    is_installed = (project_root / "node_modules" / PACKAGE_NAME).exists()
    return has_skill_sources and not is_installed


def _report_skip(reporter: Reporter) -> None:
    reporter.step(
        "Development mode detected: skipping initialization in the skills repository."
    )
    reporter.detail("To force initialization (e.g., for testing), run:")
    reporter.detail(f"  $env:FORCE_INIT=1; {PACKAGE_NAME}  (PowerShell)")
    reporter.detail(f"  FORCE_INIT=1 {PACKAGE_NAME}       (Bash/Zsh)")


def run_init(
    settings: InitSettings,
    reporter: Reporter | None = None,
    *,
    interactive: bool = False,
) -> InitResult:
    """Install skills into the host project and update its metadata.

    Returns a SKIP result without touching anything when running inside the
    package's own checkout, unless ``settings.force`` is set.

    Raises InitError if any step after the development-mode check fails.
    """
    reporter = reporter or Reporter()

    project_root = settings.project_root or find_project_root(settings.start_dir)
    if not settings.force and is_development(project_root, settings.package_root):
        _report_skip(reporter)
        return InitResult(status=InitState.SKIP, project_root=project_root)

    reporter.step(
        f"Initializing {bold('Obsidian Dev Skills')} in: {file_path_style(str(project_root))}"
    )

    try:
        paths = AgentPaths.for_project(project_root)

        project_type = resolve_project_type(
            project_root,
            interactive=interactive,
            override=settings.project_type,
            warn=reporter.warn,
        )
        reporter.step(f"Using project type: {info(project_type.value)}")

        if not paths.skills_dir.exists():
            reporter.detail(f"Creating directory: {paths.skills_dir}")
        copied = install_skills(
            paths.skills_dir,
            project_type,
            source_dir=settings.source_dir,
            on_copy=lambda name: reporter.step(f"Copying skill: {info(name)}"),
            on_missing=lambda path: reporter.warn(f"Source skill not found at {path}"),
        )

        if initialize_project_skill(paths.skills_dir):
            reporter.step("Initialized project-specific skill template")

        installed = selected_skills(project_type) + [PROJECT_SKILL_NAME]
        strategy = sync_agents_md(paths.agents_md, installed, paths.agent_dir.name)
        reporter.step(f"Updated {paths.agents_md.name} (openskills format)")

        record_sync(paths.sync_status_file)
        reporter.step(
            f"Updated {paths.agent_dir.name}/{paths.sync_status_file.name}"
        )
    except click.Abort:
        raise
    except Exception as e:
        raise InitError(str(e)) from e

    reporter.done(f"Successfully installed Obsidian Dev Skills: {', '.join(installed)}")

    return InitResult(
        status=InitState.DONE,
        project_root=project_root,
        project_type=project_type,
        installed_skills=installed,
        copied_skills=copied,
        agents_md_strategy=strategy,
    )
