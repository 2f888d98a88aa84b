"""Skill bundle installation into the host project's agent directory."""

import shutil
from collections.abc import Callable
from pathlib import Path
from types import MappingProxyType

from .classify import ProjectType
from .paths import SKILLS_SOURCE_DIR

# Target bundle name -> bundle name inside SKILLS_SOURCE_DIR, in install order
SKILL_MAPPINGS = MappingProxyType(
    {
        "obsidian-dev": "obsidian-dev",
        "obsidian-theme-dev": "obsidian-theme-dev",
        "obsidian-ops": "obsidian-ops",
        "obsidian-ref": "obsidian-ref",
    }
)

PROJECT_SKILL_NAME = "project"
SKILL_FILE_NAME = "SKILL.md"

PROJECT_SKILL_TEMPLATE = """\
---
name: project
description: Project-specific architecture, maintenance tasks, and unique conventions. Load when performing project-wide maintenance or working with the core architecture.
---

# Project Context

This skill provides the unique context and architectural details for this repository.

## Purpose

To provide guidance on project-specific structures and tasks that differ from general Obsidian development patterns.

## When to Use

Load this skill when:
- Understanding the repository's unique architecture.
- Performing recurring maintenance tasks.
- Following project-specific coding conventions.

## Project Overview

<!--
TIP: Update this section with your project's high-level architecture.
Example:
- **Architecture**: Organized structure with main code in `src/main.ts` and settings in `src/settings.ts`.
- **Reference Management**: Uses a `.ref` folder with symlinks to centralized Obsidian repositories.
-->

- **Primary Stack**: [e.g., TypeScript, Svelte, Lucide icons]
- **Key Directories**: [e.g., src/, styles/, scripts/]

## Core Architecture

- [Detail how primary components interact here]

## Project-Specific Conventions

- **Naming**: [e.g., class names use PascalCase, private methods prefixed with _]
- **Patterns**: [e.g., use of custom stores, specific state management]

## Key Files

- `manifest.json`: Plugin/theme manifest
- `package.json`: Build scripts and dependencies

## Maintenance Tasks

- [e.g., npm run dev to start development server]
- [e.g., npm run version-bump to release new version]
"""


def selected_skills(project_type: ProjectType) -> list[str]:
    """Get the target bundle names a project type should receive."""
    return [name for name in SKILL_MAPPINGS if project_type.includes(name)]


def copy_skill(source_dir: Path, dest_dir: Path) -> Path:
    """Replace ``dest_dir`` with a fresh copy of ``source_dir``.

    Returns the destination path.
    """
    # Remove existing (file, directory, or symlink)
    if dest_dir.is_symlink() or dest_dir.exists():
        if dest_dir.is_dir() and not dest_dir.is_symlink():
            shutil.rmtree(dest_dir)
        else:
            dest_dir.unlink()

    shutil.copytree(source_dir, dest_dir)

    return dest_dir


def install_skills(
    skills_dir: Path,
    project_type: ProjectType,
    *,
    source_dir: Path = SKILLS_SOURCE_DIR,
    on_copy: Callable[[str], None] | None = None,
    on_missing: Callable[[Path], None] | None = None,
) -> list[str]:
    """Copy the bundles selected by ``project_type`` into ``skills_dir``.

    Bundles missing from ``source_dir`` are reported through ``on_missing``
    and skipped. Returns the target names actually copied.
    """
    skills_dir.mkdir(parents=True, exist_ok=True)

    installed = []
    for target_name, source_name in SKILL_MAPPINGS.items():
        if not project_type.includes(target_name):
            continue

        source_path = source_dir / source_name
        if not source_path.is_dir():
            if on_missing is not None:
                on_missing(source_path)
            continue

        if on_copy is not None:
            on_copy(target_name)
        copy_skill(source_path, skills_dir / target_name)
        installed.append(target_name)

    return installed


def initialize_project_skill(skills_dir: Path) -> bool:
    """Create the project skill template unless it already exists.

    Existing templates are never touched so local edits survive re-runs.
    Returns True if the template was written.
    """
    skill_file = skills_dir / PROJECT_SKILL_NAME / SKILL_FILE_NAME
    if skill_file.exists():
        return False

    skill_file.parent.mkdir(parents=True, exist_ok=True)
    skill_file.write_text(PROJECT_SKILL_TEMPLATE, encoding="utf-8")
    return True
