"""Application settings.

This module provides the settings model and I/O functions for pkgdeck.
Settings describe how the external package tool is invoked and how often
the terminal driver ticks the task scheduler.

Settings are stored in ~/.config/pkgdeck/settings.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pkgdeck.core.paths import get_settings_path

logger = logging.getLogger(__name__)


class AppSettings(BaseModel):
    """Settings for pkgdeck.

    Attributes:
        tool_command: Argument vector prefix used to invoke the package tool.
        timeout_seconds: Maximum time a single tool command may run.
        poll_interval: Seconds the terminal driver sleeps between ticks.
    """

    model_config = ConfigDict(extra="forbid")

    tool_command: Annotated[
        list[str],
        Field(description="Package tool command and leading arguments"),
    ] = ["upm"]
    timeout_seconds: Annotated[
        int,
        Field(ge=10, le=3600, description="Timeout in seconds (10-3600)"),
    ] = 600
    poll_interval: Annotated[
        float,
        Field(ge=0.0, le=1.0, description="Seconds between scheduler ticks"),
    ] = 0.05

    @field_validator("tool_command")
    @classmethod
    def validate_tool_command(cls, value: list[str]) -> list[str]:
        """Reject an empty command or blank arguments."""
        if not value or not all(part.strip() for part in value):
            msg = "tool_command must be a non-empty list of non-empty strings"
            raise ValueError(msg)
        return value


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


class SettingsValidationError(SettingsError):
    """Raised when settings content is invalid."""


def load_settings(path: Path | None = None) -> AppSettings:
    """Load settings from a TOML file.

    A missing file is not an error: the defaults are returned instead.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated AppSettings object.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsValidationError: If the content doesn't match the schema.
        SettingsError: If the file cannot be read.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        logger.debug("No settings file at %s, using defaults", settings_path)
        return AppSettings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return AppSettings.model_validate(data)
    except ValidationError as e:
        raise SettingsValidationError(f"Invalid settings content: {e}") from e


def save_settings(settings: AppSettings, path: Path | None = None) -> Path:
    """Save settings to a TOML file atomically.

    Args:
        settings: The settings to save.
        path: Path to save to. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()
    settings_path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(settings.model_dump(), f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path
