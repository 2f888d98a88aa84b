"""Settings for an init run.

Values come from the environment set up by the package manager:
- INIT_CWD: directory the install command was run from
- FORCE_INIT: run even inside this package's own checkout

Command line flags override the environment.
"""

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field

from .classify import ProjectType
from .paths import PACKAGE_ROOT, SKILLS_SOURCE_DIR, get_start_dir

FORCE_ENV_VAR = "FORCE_INIT"

_FALSE_VALUES = {"", "0", "false", "no"}


def env_flag(environ: Mapping[str, str], name: str) -> bool:
    """Check whether an environment flag is set to a truthy value."""
    return environ.get(name, "").strip().lower() not in _FALSE_VALUES


class InitSettings(BaseModel):
    """Inputs for an init run."""

    # Where the upward project root search starts
    start_dir: Path

    # Skip the development-mode guard
    force: bool = False

    # Use this project root instead of searching for one
    project_root: Path | None = None

    # Use this project type instead of detecting or asking
    project_type: ProjectType | None = None

    package_root: Path = Field(default=PACKAGE_ROOT)
    source_dir: Path = Field(default=SKILLS_SOURCE_DIR)

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, **overrides: object
    ) -> "InitSettings":
        """Build settings from the environment.

        Overrides that are None are ignored, so unset CLI options fall back
        to the environment.
        """
        environ = os.environ if environ is None else environ
        values: dict[str, object] = {
            "start_dir": get_start_dir(dict(environ)),
            "force": env_flag(environ, FORCE_ENV_VAR),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)
