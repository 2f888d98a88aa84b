"""Tests for CLI module."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner
from obsidian_dev_skills.cli import EXIT_FAILURE, cli
from obsidian_dev_skills.paths import PACKAGE_ROOT


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture
def theme_project(tmp_path: Path) -> Path:
    """Create a host theme project."""
    root = tmp_path / "my-theme"
    root.mkdir()
    (root / "package.json").write_text(json.dumps({"name": "my-theme"}))
    (root / "manifest.json").write_text(json.dumps({"name": "My Theme"}))
    (root / "theme.css").write_text("body {}\n")
    return root


def env_for(start: Path) -> dict[str, str | None]:
    return {"INIT_CWD": str(start), "FORCE_INIT": None, "NO_COLOR": "1"}


class TestCli:
    def test_help(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Install Obsidian development skills" in result.output

    def test_init_from_init_cwd(
        self, runner: CliRunner, theme_project: Path
    ) -> None:
        result = runner.invoke(cli, [], env=env_for(theme_project))

        assert result.exit_code == 0, result.output
        assert "Using project type: theme" in result.output
        assert "Successfully installed Obsidian Dev Skills" in result.output
        skills_dir = theme_project / ".agent" / "skills"
        assert (skills_dir / "obsidian-theme-dev" / "SKILL.md").exists()
        assert not (skills_dir / "obsidian-dev").exists()
        assert (skills_dir / "project" / "SKILL.md").exists()

        agents_md = (theme_project / "AGENTS.md").read_text()
        assert "<name>obsidian-theme-dev</name>" in agents_md
        assert "<name>project</name>" in agents_md
        assert "<name>obsidian-dev</name>" not in agents_md

    def test_quiet(self, runner: CliRunner, theme_project: Path) -> None:
        result = runner.invoke(cli, ["-q"], env=env_for(theme_project))

        assert result.exit_code == 0
        assert result.output == ""

    def test_type_option(self, runner: CliRunner, theme_project: Path) -> None:
        result = runner.invoke(cli, ["--type", "both"], env=env_for(theme_project))

        assert result.exit_code == 0
        assert "Using project type: both" in result.output
        assert (theme_project / ".agent" / "skills" / "obsidian-dev").is_dir()

    def test_invalid_type(self, runner: CliRunner, theme_project: Path) -> None:
        result = runner.invoke(cli, ["--type", "app"], env=env_for(theme_project))
        assert result.exit_code != 0
        assert not (theme_project / ".agent").exists()

    def test_ambiguous_without_terminal_uses_both(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        result = runner.invoke(cli, [], env=env_for(tmp_path))

        assert result.exit_code == 0
        assert "Using project type: both" in result.output
        assert "not immediately clear" not in result.output

    def test_project_root_option(
        self, runner: CliRunner, theme_project: Path, tmp_path: Path
    ) -> None:
        result = runner.invoke(
            cli,
            ["--project-root", str(theme_project)],
            env=env_for(tmp_path),
        )

        assert result.exit_code == 0
        assert (theme_project / "AGENTS.md").exists()

    def test_development_mode_skips(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["--project-root", str(PACKAGE_ROOT)], env={"FORCE_INIT": None}
        )

        assert result.exit_code == 0
        assert "Development mode detected" in result.output
        assert "FORCE_INIT=1" in result.output

    def test_development_mode_skips_from_checkout_subdirectory(
        self, runner: CliRunner
    ) -> None:
        subdir = PACKAGE_ROOT / "tests"

        result = runner.invoke(
            cli,
            ["--type", "plugin"],
            env={"INIT_CWD": str(subdir), "FORCE_INIT": None, "NO_COLOR": "1"},
        )

        assert result.exit_code == 0
        assert "Development mode detected" in result.output
        assert not (subdir / ".agent").exists()
        assert not (subdir / "AGENTS.md").exists()

    def test_malformed_manifest_warns(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        (tmp_path / "manifest.json").write_text("{")

        result = runner.invoke(cli, [], env=env_for(tmp_path))

        assert result.exit_code == 0
        assert "Warning: Failed to parse manifest.json" in result.output

    def test_failure_exits_non_zero(
        self, runner: CliRunner, theme_project: Path
    ) -> None:
        (theme_project / ".agent").write_text("in the way")

        result = runner.invoke(cli, [], env=env_for(theme_project))

        assert result.exit_code == EXIT_FAILURE
        assert "Error during initialization:" in result.output

    def test_undecodable_agents_md_exits_non_zero(
        self, runner: CliRunner, theme_project: Path
    ) -> None:
        (theme_project / "AGENTS.md").write_bytes(b"# Agents\n\xff\xfe bad\n")

        result = runner.invoke(cli, ["--type", "plugin"], env=env_for(theme_project))

        assert result.exit_code == EXIT_FAILURE
        assert "Error during initialization:" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_preserves_existing_status_fields(
        self, runner: CliRunner, theme_project: Path
    ) -> None:
        status_file = theme_project / ".agent" / "sync-status.json"
        status_file.parent.mkdir()
        status_file.write_text(
            json.dumps({"lastFullSync": "2020-01-01", "customField": "x"})
        )

        result = runner.invoke(cli, [], env=env_for(theme_project))

        assert result.exit_code == 0
        status = json.loads(status_file.read_text())
        assert status["customField"] == "x"
        assert status["lastFullSync"] != "2020-01-01"
        assert status["lastSyncSource"] == "obsidian-dev-skills initialization"
