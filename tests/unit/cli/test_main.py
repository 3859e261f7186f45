"""Unit tests for the main CLI application.

Tests for the global options and command registration.
"""

from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from pkgdeck import __version__
from pkgdeck.cli.main import app
from pkgdeck.core.manager import PackageManager
from pkgdeck.core.settings import AppSettings
from pkgdeck.models.project import ProjectConfigType

runner = CliRunner()


class TestMainApp:
    """Tests for the top-level app."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"pkgdeck version {__version__}" in result.stdout

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in (
            "packages",
            "releases",
            "install",
            "delete",
            "create",
            "info",
            "locate",
            "project",
            "settings",
        ):
            assert command in result.stdout

    def test_invalid_config_type(self) -> None:
        result = runner.invoke(app, ["--config-type", "global", "packages"])

        assert result.exit_code != 0


class TestGlobalOptions:
    """Tests for options passed through the context to commands."""

    def test_project_dir_and_config_type(self, manager: PackageManager, project_dir: Path) -> None:
        """--project-dir and --config-type decide how the manager is built."""
        with (
            patch("pkgdeck.cli.types.build_manager", return_value=manager) as mock_build,
            patch("pkgdeck.cli.types.load_settings", return_value=AppSettings()),
        ):
            result = runner.invoke(
                app, ["-C", str(project_dir), "-t", "ALL-USER", "project", "show"]
            )

        assert result.exit_code == 0
        _, built_dir, config_type = mock_build.call_args.args
        assert built_dir == project_dir.resolve()
        assert config_type == ProjectConfigType.ALL_PROJECTS_USER

    def test_defaults(self, manager: PackageManager) -> None:
        with (
            patch("pkgdeck.cli.types.build_manager", return_value=manager) as mock_build,
            patch("pkgdeck.cli.types.load_settings", return_value=AppSettings()),
        ):
            result = runner.invoke(app, ["project", "show"])

        assert result.exit_code == 0
        _, built_dir, config_type = mock_build.call_args.args
        assert built_dir == Path.cwd()
        assert config_type == ProjectConfigType.LOCAL_PROJECT
