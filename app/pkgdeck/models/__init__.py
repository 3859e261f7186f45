"""Data models for pkgdeck.

This module exports the core data structures used throughout the application.
"""

from pkgdeck.models.package import AssetStoreInfo, InstallInfo, PackageInfo, ReleaseInfo
from pkgdeck.models.project import ProjectConfig, ProjectConfigType

__all__ = [
    "AssetStoreInfo",
    "InstallInfo",
    "PackageInfo",
    "ProjectConfig",
    "ProjectConfigType",
    "ReleaseInfo",
]
