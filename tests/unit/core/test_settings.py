"""Unit tests for application settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from pkgdeck.core.settings import (
    AppSettings,
    SettingsParseError,
    SettingsValidationError,
    load_settings,
    save_settings,
)


class TestAppSettings:
    """Tests for AppSettings model."""

    def test_defaults(self) -> None:
        settings = AppSettings()
        assert settings.tool_command == ["upm"]
        assert settings.timeout_seconds == 600
        assert settings.poll_interval == 0.05

    def test_custom_values(self) -> None:
        settings = AppSettings(tool_command=["dotnet", "upm.dll"], timeout_seconds=30)
        assert settings.tool_command == ["dotnet", "upm.dll"]
        assert settings.timeout_seconds == 30

    def test_timeout_bounds(self) -> None:
        """timeout_seconds must be between 10 and 3600."""
        with pytest.raises(ValidationError):
            AppSettings(timeout_seconds=5)
        with pytest.raises(ValidationError):
            AppSettings(timeout_seconds=4000)

    def test_poll_interval_bounds(self) -> None:
        with pytest.raises(ValidationError):
            AppSettings(poll_interval=-0.1)
        with pytest.raises(ValidationError):
            AppSettings(poll_interval=2.0)

    def test_empty_tool_command_rejected(self) -> None:
        with pytest.raises(ValidationError, match="non-empty"):
            AppSettings(tool_command=[])

    def test_blank_tool_argument_rejected(self) -> None:
        with pytest.raises(ValidationError, match="non-empty"):
            AppSettings(tool_command=["upm", "  "])

    def test_extra_fields_forbidden(self) -> None:
        with pytest.raises(ValidationError):
            AppSettings.model_validate({"unknown": 1})


class TestLoadSettings:
    """Tests for load_settings function."""

    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        """A missing settings file is not an error."""
        assert load_settings(tmp_path / "settings.toml") == AppSettings()

    def test_loads_values(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.toml"
        path.write_text('tool_command = ["pkgtool", "--quiet"]\ntimeout_seconds = 60\n')

        settings = load_settings(path)

        assert settings.tool_command == ["pkgtool", "--quiet"]
        assert settings.timeout_seconds == 60
        assert settings.poll_interval == 0.05

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.toml"
        path.write_text("tool_command = [")

        with pytest.raises(SettingsParseError, match="Invalid TOML syntax"):
            load_settings(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.toml"
        path.write_text("timeout_seconds = 1\n")

        with pytest.raises(SettingsValidationError, match="Invalid settings content"):
            load_settings(path)


class TestSaveSettings:
    """Tests for save_settings function."""

    def test_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "settings.toml"
        settings = AppSettings(tool_command=["upm", "-v"], timeout_seconds=120, poll_interval=0.2)

        assert save_settings(settings, path) == path
        assert load_settings(path) == settings

    def test_leaves_no_temp_files(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.toml"
        save_settings(AppSettings(), path)

        assert [p.name for p in tmp_path.iterdir()] == ["settings.toml"]
