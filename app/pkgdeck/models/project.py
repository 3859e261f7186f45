"""Project membership models.

A project lists which installed packages it links as plain assets and which
as plugins. The snapshot is stored in a TOML file whose location depends on
the selected configuration type.
"""

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ProjectConfigType(str, Enum):
    """Where a project's membership snapshot lives.

    Attributes:
        LOCAL_PROJECT: Shared file in the project root.
        LOCAL_PROJECT_USER: Per-user file in the project root.
        ALL_PROJECTS: Shared file next to all projects.
        ALL_PROJECTS_USER: Per-user file next to all projects.
    """

    LOCAL_PROJECT = "local"
    LOCAL_PROJECT_USER = "local-user"
    ALL_PROJECTS = "all"
    ALL_PROJECTS_USER = "all-user"

    @property
    def is_user(self) -> bool:
        """Check if this type uses the per-user file."""
        return self in (ProjectConfigType.LOCAL_PROJECT_USER, ProjectConfigType.ALL_PROJECTS_USER)

    @property
    def is_shared_across_projects(self) -> bool:
        """Check if this type lives above the project root."""
        return self in (ProjectConfigType.ALL_PROJECTS, ProjectConfigType.ALL_PROJECTS_USER)


class ProjectConfig(BaseModel):
    """Membership snapshot of a project.

    Attributes:
        assets: Package names linked as assets.
        plugins: Package names linked as plugins.
    """

    model_config = ConfigDict(extra="forbid")

    assets: Annotated[
        list[str],
        Field(default_factory=list, description="Packages linked as assets"),
    ]
    plugins: Annotated[
        list[str],
        Field(default_factory=list, description="Packages linked as plugins"),
    ]

    @model_validator(mode="after")
    def validate_no_duplicates(self) -> "ProjectConfig":
        """Validate that no package is linked both as asset and plugin."""
        duplicates = set(self.assets) & set(self.plugins)
        if duplicates:
            msg = f"Packages cannot be both assets and plugins: {sorted(duplicates)}"
            raise ValueError(msg)
        return self

    @property
    def is_empty(self) -> bool:
        """Check if the snapshot links no packages at all."""
        return not self.assets and not self.plugins

    def matches(self, other: "ProjectConfig") -> bool:
        """Compare two snapshots ignoring ordering."""
        return sorted(self.assets) == sorted(other.assets) and sorted(self.plugins) == sorted(
            other.plugins
        )
