"""Unit tests for XDG path management.

Tests for the paths module that provides XDG-compliant directory paths and
the locations of a project's linked package folders.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from pkgdeck.core.paths import (
    APP_NAME,
    ensure_config_dir,
    ensure_dir,
    get_config_dir,
    get_project_assets_dir,
    get_project_plugins_dir,
    get_settings_path,
    get_user_theme_path,
)


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            os.environ.pop("XDG_CONFIG_HOME", None)

            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_config_dir()

        assert result == tmp_path / APP_NAME

    def test_empty_xdg_config_home_falls_back(self) -> None:
        """An empty XDG_CONFIG_HOME is treated as unset."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": ""}):
            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME


class TestConveniencePaths:
    """Tests for file paths inside the config directory."""

    def test_get_settings_path(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_settings_path() == tmp_path / APP_NAME / "settings.toml"

    def test_get_user_theme_path(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_user_theme_path() == tmp_path / APP_NAME / "theme.toml"


class TestProjectDirs:
    """Tests for the linked package folders of a project."""

    def test_assets_dir(self, tmp_path: Path) -> None:
        assert get_project_assets_dir(tmp_path) == tmp_path / "Assets"

    def test_plugins_dir_is_inside_assets(self, tmp_path: Path) -> None:
        assert get_project_plugins_dir(tmp_path) == tmp_path / "Assets" / "Plugins"


class TestEnsureDirs:
    """Tests for directory creation functions."""

    def test_ensure_config_dir_creates_directory(self, tmp_path: Path) -> None:
        """ensure_config_dir creates the directory if it doesn't exist."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = ensure_config_dir()

        assert result == tmp_path / APP_NAME
        assert result.is_dir()

    def test_ensure_config_dir_idempotent(self, tmp_path: Path) -> None:
        """ensure_config_dir can be called multiple times safely."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            first = ensure_config_dir()
            second = ensure_config_dir()

        assert first == second
        assert first.is_dir()

    def test_ensure_dir_creates_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "c"

        assert ensure_dir(target, "nested") == target
        assert target.is_dir()

    def test_ensure_dir_permission_error(self, tmp_path: Path) -> None:
        """Permission problems are reported as RuntimeError."""
        target = tmp_path / "locked"
        with (
            patch.object(Path, "mkdir", side_effect=PermissionError("denied")),
            pytest.raises(RuntimeError, match="Permission denied"),
        ):
            ensure_dir(target, "locked")

    def test_ensure_dir_os_error(self, tmp_path: Path) -> None:
        target = tmp_path / "broken"
        with (
            patch.object(Path, "mkdir", side_effect=OSError("disk full")),
            pytest.raises(RuntimeError, match="disk full"),
        ):
            ensure_dir(target, "broken")
