"""Package and release models.

This module defines the Pydantic models describing what the external
package tool reports: installed packages and the releases available for
installation. Both lists are replaced wholesale on every refresh, so the
models are frozen.
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# The package tool speaks camelCase JSON
_TOOL_MODEL_CONFIG = ConfigDict(
    frozen=True,
    extra="ignore",
    alias_generator=to_camel,
    populate_by_name=True,
)


class AssetStoreInfo(BaseModel):
    """Asset store metadata attached to a release.

    Attributes:
        publish_date: Publish date as reported by the store (ISO 8601).
        publisher_label: Display name of the publisher.
        category_label: Display name of the store category.
        description: Long description of the release.
        unity_version: Engine version the release was published for.
        publish_notes: Release notes.
        link_type: Store link type (e.g., "content").
        link_id: Store link identifier.
    """

    model_config = _TOOL_MODEL_CONFIG

    publish_date: str | None = None
    publisher_label: str | None = None
    category_label: str | None = None
    description: str | None = None
    unity_version: str | None = None
    publish_notes: str | None = None
    link_type: str | None = None
    link_id: str | None = None

    @property
    def publish_timestamp(self) -> datetime | None:
        """Parsed publish date, or None if missing or malformed."""
        if not self.publish_date:
            return None
        try:
            return datetime.fromisoformat(self.publish_date.replace("Z", "+00:00"))
        except ValueError:
            return None


class ReleaseInfo(BaseModel):
    """A release that can be installed as a package.

    Attributes:
        id: Stable release identifier, shared by every version of a release.
        name: Release name.
        version: Human-readable version string.
        version_code: Monotonic version number used for up/downgrade checks.
        compressed_size: Download size in bytes.
        local_path: Path of the release archive on disk, if cached locally.
        asset_store_info: Store metadata, if the release comes from the store.
    """

    model_config = _TOOL_MODEL_CONFIG

    id: Annotated[str, Field(min_length=1)]
    name: Annotated[str, Field(min_length=1)]
    version: str | None = None
    version_code: int | None = None
    compressed_size: Annotated[int | None, Field(ge=0)] = None
    local_path: str | None = None
    asset_store_info: AssetStoreInfo | None = None

    @property
    def size_human(self) -> str:
        """Return human-readable compressed size string."""
        if self.compressed_size is None:
            return "unknown"

        size = float(self.compressed_size)
        for unit in ("B", "KB", "MB", "GB"):
            if size < 1024:
                return f"{size:.1f} {unit}"
            size /= 1024
        return f"{size:.1f} TB"


class InstallInfo(BaseModel):
    """Describes how an installed package got onto the system."""

    model_config = _TOOL_MODEL_CONFIG

    release_info: ReleaseInfo | None = None


class PackageInfo(BaseModel):
    """A package installed in the local package folder.

    Attributes:
        name: Package (folder) name.
        path: Absolute path of the package folder.
        install_info: Present when the package was installed from a release.
    """

    model_config = _TOOL_MODEL_CONFIG

    name: Annotated[str, Field(min_length=1)]
    path: str
    install_info: InstallInfo | None = None

    @property
    def release_info(self) -> ReleaseInfo | None:
        """The release this package was installed from, if any."""
        if self.install_info is None:
            return None
        return self.install_info.release_info

    @property
    def version(self) -> str | None:
        """Installed version string, if the package came from a release."""
        release = self.release_info
        return release.version if release is not None else None
