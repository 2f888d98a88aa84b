"""Deciding whether the host project is an Obsidian plugin, theme, or both."""

import json
from collections.abc import Callable
from enum import Enum
from pathlib import Path

import click

MANIFEST_FILE_NAME = "manifest.json"
THEME_CSS_FILE_NAME = "theme.css"

# Bundles that only make sense for one kind of project
PLUGIN_ONLY_SKILL = "obsidian-dev"
THEME_ONLY_SKILL = "obsidian-theme-dev"


class ProjectType(str, Enum):
    PLUGIN = "plugin"
    THEME = "theme"
    BOTH = "both"

    def includes(self, skill: str) -> bool:
        """Check whether a skill bundle should be installed for this type."""
        if self is ProjectType.PLUGIN:
            return skill != THEME_ONLY_SKILL
        if self is ProjectType.THEME:
            return skill != PLUGIN_ONLY_SKILL
        return True


# Accepted prompt answers
_CHOICES = {
    "p": ProjectType.PLUGIN,
    "plugin": ProjectType.PLUGIN,
    "t": ProjectType.THEME,
    "theme": ProjectType.THEME,
    "b": ProjectType.BOTH,
    "both": ProjectType.BOTH,
    "": ProjectType.BOTH,
}


def detect_project_type(
    root: Path, *, warn: Callable[[str], None]
) -> ProjectType:
    """Classify a project from its manifest.json and theme.css.

    A manifest with an ``id`` marks a plugin; a manifest without one marks a
    theme (Obsidian theme manifests carry no id), as does a theme.css file.
    No evidence, or evidence for both, gives BOTH.
    """
    manifest_path = root / MANIFEST_FILE_NAME
    theme_css_path = root / THEME_CSS_FILE_NAME

    is_plugin = False
    is_theme = False

    if manifest_path.exists():
        try:
            manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            warn(f"Failed to parse manifest.json at {manifest_path}")
        else:
            if isinstance(manifest, dict) and manifest.get("id"):
                is_plugin = True
            else:
                is_theme = True

    if theme_css_path.exists():
        is_theme = True

    if is_plugin == is_theme:
        return ProjectType.BOTH
    return ProjectType.PLUGIN if is_plugin else ProjectType.THEME


def ask_project_type(interactive: bool) -> ProjectType:
    """Ask the operator which kind of project this is.

    Without a terminal attached this returns BOTH without prompting.
    Unrecognized answers re-prompt.
    """
    if not interactive:
        return ProjectType.BOTH

    click.echo()
    click.echo("The project type is not immediately clear.")
    click.echo("Is this an Obsidian plugin project, a theme project, or both?")
    click.echo("Choices: [p]lugin, [t]heme, [b]oth (default)")

    while True:
        answer = click.prompt(
            ">", default="", show_default=False, prompt_suffix=" "
        )
        choice = _CHOICES.get(answer.strip().lower())
        if choice is not None:
            return choice
        click.echo("Invalid choice. Please enter p, t, or b.")


def resolve_project_type(
    root: Path,
    *,
    interactive: bool,
    warn: Callable[[str], None],
    override: ProjectType | None = None,
) -> ProjectType:
    """Get the project type, preferring an explicit override."""
    if override is not None:
        return override

    project_type = detect_project_type(root, warn=warn)
    if project_type is ProjectType.BOTH and interactive:
        project_type = ask_project_type(interactive)
    return project_type
