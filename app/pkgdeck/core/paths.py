"""XDG-compliant path management for pkgdeck.

This module provides standardized paths following the XDG Base Directory
Specification for application configuration, plus the locations of the
per-project membership files.

XDG defaults:
- Config: ~/.config/pkgdeck/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "pkgdeck"

# Project membership file names
PROJECT_CONFIG_FILENAME = "pkgdeck-project.toml"
PROJECT_CONFIG_USER_FILENAME = "pkgdeck-project.user.toml"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/pkgdeck/ (or XDG_CONFIG_HOME/pkgdeck/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_settings_path() -> Path:
    """Get the application settings file path.

    Returns:
        Path to ~/.config/pkgdeck/settings.toml.
    """
    return get_config_dir() / "settings.toml"


def get_user_theme_path() -> Path:
    """Get the user theme configuration path.

    Returns:
        Path to ~/.config/pkgdeck/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return ensure_dir(get_config_dir(), "config")


def get_project_assets_dir(project_root: Path) -> Path:
    """Get the directory that holds a project's linked asset packages.

    Args:
        project_root: Root directory of the project.

    Returns:
        Path to <project_root>/Assets.
    """
    return project_root / "Assets"


def get_project_plugins_dir(project_root: Path) -> Path:
    """Get the directory that holds a project's linked plugin packages.

    Returns:
        Path to <project_root>/Assets/Plugins.
    """
    return get_project_assets_dir(project_root) / "Plugins"
