"""Project membership file I/O.

This module loads and saves the list of packages a project links as assets
and as plugins, in TOML format with validation through Pydantic models.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

import tomli_w
from pydantic import ValidationError

from pkgdeck.core.paths import PROJECT_CONFIG_FILENAME, PROJECT_CONFIG_USER_FILENAME
from pkgdeck.models.project import ProjectConfig, ProjectConfigType

logger = logging.getLogger(__name__)


class ProjectConfigError(Exception):
    """Base exception for project config errors."""


class ProjectConfigParseError(ProjectConfigError):
    """Raised when a project config file cannot be parsed."""


class ProjectConfigValidationError(ProjectConfigError):
    """Raised when project config content is invalid."""


class ProjectStore:
    """Loads and saves project membership snapshots.

    Attributes:
        project_root: Root directory of the project.
    """

    def __init__(self, project_root: Path) -> None:
        self.project_root = project_root

    def path_for(self, config_type: ProjectConfigType) -> Path:
        """Resolve the file backing a configuration type.

        Args:
            config_type: Which snapshot to locate.

        Returns:
            Path of the TOML file (which may not exist).
        """
        shared = config_type.is_shared_across_projects
        base = self.project_root.parent if shared else self.project_root
        filename = PROJECT_CONFIG_USER_FILENAME if config_type.is_user else PROJECT_CONFIG_FILENAME
        return base / filename

    def load(self, config_type: ProjectConfigType) -> ProjectConfig | None:
        """Load a snapshot.

        Returns:
            The snapshot, or None if the file doesn't exist or is empty.

        Raises:
            ProjectConfigParseError: If the TOML syntax is invalid.
            ProjectConfigValidationError: If the content doesn't match the schema.
            ProjectConfigError: If the file cannot be read.
        """
        path = self.path_for(config_type)

        if not path.exists():
            return None

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ProjectConfigParseError(f"Invalid TOML syntax in {path}: {e}") from e
        except OSError as e:
            raise ProjectConfigError(f"Failed to read project config: {e}") from e

        if not data:
            logger.debug("Project config %s is empty", path)
            return None

        try:
            return ProjectConfig.model_validate(data)
        except ValidationError as e:
            raise ProjectConfigValidationError(f"Invalid project config content: {e}") from e

    def save(self, config: ProjectConfig, config_type: ProjectConfigType) -> Path:
        """Save a snapshot atomically.

        Returns:
            Path where the snapshot was saved.

        Raises:
            ProjectConfigError: If the file cannot be written.
        """
        path = self.path_for(config_type)
        path.parent.mkdir(parents=True, exist_ok=True)

        tmp_path: Path | None = None
        try:
            with NamedTemporaryFile(
                mode="wb",
                dir=path.parent,
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                tomli_w.dump(_config_to_dict(config), f)
            os.replace(str(tmp_path), str(path))
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise ProjectConfigError(f"Failed to write project config: {e}") from e

        logger.debug("Saved project config to %s", path)
        return path


def _config_to_dict(config: ProjectConfig) -> dict[str, Any]:
    return {
        "assets": list(config.assets),
        "plugins": list(config.plugins),
    }
