"""Locating the host project and its agent directory.

The host project is the first directory, walking upward from where the
install was started, whose ``package.json`` names some package other than
this one. The package's own checkout counts as a host too (so development
runs can be detected and skipped), but a copy living under ``node_modules``
never does.
"""

import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path

PACKAGE_NAME = "obsidian-dev-skills"

# Directory holding the obsidian_dev_skills package (the repo root in a checkout)
PACKAGE_ROOT = Path(__file__).resolve().parent.parent

# Directory containing the shipped skill bundles
SKILLS_SOURCE_DIR = Path(__file__).resolve().parent / "skills"

MANIFEST_FILE_NAME = "package.json"
AGENT_DIR_NAMES = (".agent", ".agents")
SKILLS_DIR_NAME = "skills"
SYNC_STATUS_FILE_NAME = "sync-status.json"
AGENTS_MD_FILE_NAME = "AGENTS.md"


def get_start_dir(environ: dict[str, str] | None = None) -> Path:
    """Get the directory the install was started from.

    npm, pnpm and yarn export INIT_CWD for lifecycle scripts; otherwise the
    process working directory is used.
    """
    environ = os.environ if environ is None else environ
    init_cwd = environ.get("INIT_CWD")
    if init_cwd:
        return Path(init_cwd)
    return Path.cwd()


def read_package_name(manifest_path: Path) -> str | None:
    """Read the ``name`` field of a package.json.

    Raises ValueError if the file is not a JSON object.
    """
    data = json.loads(manifest_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{manifest_path} is not a JSON object")
    name = data.get("name")
    return name if isinstance(name, str) else None


def _in_node_modules(path: Path) -> bool:
    return "node_modules" in str(path).lower()


def find_project_root(start: Path, package_name: str = PACKAGE_NAME) -> Path:
    """Find the root of the project this package is being installed into.

    Falls back to ``start`` when no suitable package.json is found before
    the filesystem root.
    """
    current = Path(os.path.abspath(start))

    while True:
        manifest_path = current / MANIFEST_FILE_NAME
        if manifest_path.is_file():
            try:
                name = read_package_name(manifest_path)
            except (OSError, ValueError):
                # json.JSONDecodeError is a ValueError
                name = None
            else:
                if name != package_name:
                    return current
                if not _in_node_modules(current):
                    return current

        parent = current.parent
        if parent == current:
            break
        current = parent

    return Path(os.path.abspath(start))


def _normalize(path: str | os.PathLike[str]) -> str:
    norm = os.path.normpath(os.fspath(path))
    if len(norm) > 1:
        norm = norm.rstrip("\\/") or norm
    if sys.platform in ("win32", "darwin"):
        norm = norm.lower()
    return norm


def paths_equal(
    path1: str | os.PathLike[str] | None, path2: str | os.PathLike[str] | None
) -> bool:
    """Compare two paths, ignoring trailing separators.

    Comparison is case-insensitive on Windows and macOS.
    """
    if not path1 or not path2:
        return False
    return _normalize(path1) == _normalize(path2)


def path_is_within(
    path: str | os.PathLike[str] | None, parent: str | os.PathLike[str] | None
) -> bool:
    """Check whether ``path`` is ``parent`` or lies somewhere below it.

    Uses the same normalization as paths_equal.
    """
    if not path or not parent:
        return False
    norm_path = _normalize(os.path.abspath(path))
    norm_parent = _normalize(os.path.abspath(parent))
    if norm_path == norm_parent:
        return True
    prefix = norm_parent if norm_parent.endswith(os.sep) else norm_parent + os.sep
    return norm_path.startswith(prefix)


def resolve_agent_dir(project_root: Path) -> Path:
    """Pick ``.agent`` or ``.agents`` under the project root.

    An existing ``.agent`` wins, then an existing ``.agents``; with neither
    present the default is ``.agent``.
    """
    for name in AGENT_DIR_NAMES:
        candidate = project_root / name
        if candidate.exists():
            return candidate
    return project_root / AGENT_DIR_NAMES[0]


@dataclass(frozen=True)
class AgentPaths:
    """Host-project locations touched by an init run."""

    project_root: Path
    agent_dir: Path

    @classmethod
    def for_project(cls, project_root: Path) -> "AgentPaths":
        return cls(project_root=project_root, agent_dir=resolve_agent_dir(project_root))

    @property
    def skills_dir(self) -> Path:
        return self.agent_dir / SKILLS_DIR_NAME

    @property
    def sync_status_file(self) -> Path:
        return self.agent_dir / SYNC_STATUS_FILE_NAME

    @property
    def agents_md(self) -> Path:
        return self.project_root / AGENTS_MD_FILE_NAME
